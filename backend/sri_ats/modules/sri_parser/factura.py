"""
Parser de Factura (codDoc 01 / liquidación 03).
"""
import logging
from typing import Any, Dict

from sri_ats.config.sri_codes import DocumentTypes
from sri_ats.models.sri_document import (
    AuthorizationInfo, NormalizedDocument, ParserResult, Receptor, Valores
)
from sri_ats.models.sri_xml import FacturaXML
from sri_ats.modules.sri_parser.common import (
    build_emisor, build_result, parse_error_result, resolve_ambiente, validate_required_fields
)
from sri_ats.modules.sri_parser.normalizers import normalize_string, parse_money_to_cents
from sri_ats.modules.sri_parser.tax_utils import extract_tax_totals
from sri_ats.utils.date_utils import parse_sri_date

logger = logging.getLogger(__name__)


def parse_factura(tree: Dict[str, Any], autorizacion: AuthorizationInfo, xml_hash: str) -> ParserResult:
    """
    Normaliza una factura.

    emisor = infoTributaria; receptor = comprador; impuestos a nivel de
    documento (totalConImpuestos), no de detalle.
    """
    try:
        xml = FacturaXML.model_validate(tree["factura"])
        info_tributaria = xml.info_tributaria
        info = xml.info_factura

        taxes = extract_tax_totals(info.total_con_impuestos.total_impuesto)
        pagos = info.pagos.pago
        forma_pago = normalize_string(pagos[0].forma_pago) if pagos else ""

        document = NormalizedDocument(
            tipo=DocumentTypes.FACTURA,
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
                propina=parse_money_to_cents(info.propina),
                total=parse_money_to_cents(info.importe_total),
            ),
            forma_pago=forma_pago or None,
            xml_hash=xml_hash,
        )

        errors = validate_required_fields(document)
        logger.debug(f"Factura {document.clave_acceso or '(sin clave)'}: total={document.valores.total}")
        return build_result(document, errors)
    except Exception as e:
        return parse_error_result("factura", e)
