"""
Parser de Nota de Débito (codDoc 05).
"""
import logging
from typing import Any, Dict

from sri_ats.config.sri_codes import DocumentTypes
from sri_ats.models.sri_document import (
    AuthorizationInfo, NormalizedDocument, ParserResult, Receptor, ValidationIssue, Valores
)
from sri_ats.models.sri_xml import NotaDebitoXML
from sri_ats.modules.sri_parser.common import (
    build_emisor, build_result, parse_error_result, resolve_ambiente, validate_required_fields
)
from sri_ats.modules.sri_parser.errors import ParserErrorCodes
from sri_ats.modules.sri_parser.normalizers import normalize_string, parse_money_to_cents
from sri_ats.modules.sri_parser.tax_utils import extract_tax_totals
from sri_ats.utils.date_utils import parse_sri_date

logger = logging.getLogger(__name__)


def parse_nota_debito(tree: Dict[str, Any], autorizacion: AuthorizationInfo, xml_hash: str) -> ParserResult:
    """total = valorTotal; mismas validaciones que la nota de crédito."""
    try:
        xml = NotaDebitoXML.model_validate(tree["notaDebito"])
        info_tributaria = xml.info_tributaria
        info = xml.info_nota_debito

        entries = list(info.impuestos.impuesto) + list(info.total_con_impuestos.total_impuesto)
        taxes = extract_tax_totals(entries)
        pagos = info.pagos.pago
        forma_pago = normalize_string(pagos[0].forma_pago) if pagos else ""

        document = NormalizedDocument(
            tipo=DocumentTypes.NOTA_DEBITO,
            clave_acceso=normalize_string(info_tributaria.clave_acceso),
            numero_autorizacion=autorizacion.numero_autorizacion,
            fecha_autorizacion=autorizacion.fecha_autorizacion,
            ambiente=resolve_ambiente(autorizacion, info_tributaria),
            emisor=build_emisor(info_tributaria),
            receptor=Receptor(
                tipo_identificacion=normalize_string(info.tipo_identificacion_comprador),
                identificacion=normalize_string(info.identificacion_comprador),
                razon_social=normalize_string(info.razon_social_comprador),
            ),
            fecha=parse_sri_date(normalize_string(info.fecha_emision)),
            valores=Valores(
                subtotal=parse_money_to_cents(info.total_sin_impuestos),
                iva0=taxes.iva0,
                iva12=taxes.iva12,
                iva15=taxes.iva15,
                iva=taxes.iva_total,
                ice=taxes.ice_total,
                irbpnr=taxes.irbpnr_total,
                total=parse_money_to_cents(info.valor_total),
            ),
            forma_pago=forma_pago or None,
            xml_hash=xml_hash,
        )

        errors = validate_required_fields(document)
        warnings = []
        if not normalize_string(info.num_doc_modificado):
            warnings.append(ValidationIssue(
                code=ParserErrorCodes.MISSING_DOC_MODIFICADO,
                message="Número de documento modificado no encontrado",
                field="numDocModificado",
            ))

        logger.debug(f"Nota de débito {document.clave_acceso or '(sin clave)'}: total={document.valores.total}")
        return build_result(document, errors, warnings)
    except Exception as e:
        return parse_error_result("nota de débito", e)
