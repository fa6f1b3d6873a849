"""
Parser de Comprobante de Retención (codDoc 07).

En la retención el emisor es el agente de retención (quien paga) y el
receptor es el sujeto retenido (quien vende): roles inversos a la factura.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from sri_ats.config.sri_codes import DocumentTypes, SRIRetentionType
from sri_ats.models.sri_document import (
    AuthorizationInfo, NormalizedDocument, ParserResult, Receptor, Retenciones, ValidationIssue, Valores
)
from sri_ats.models.sri_xml import ImpuestoRetencion, RetencionXML
from sri_ats.modules.sri_parser.common import (
    build_emisor, build_result, parse_error_result, resolve_ambiente, validate_required_fields
)
from sri_ats.modules.sri_parser.errors import ParserErrorCodes
from sri_ats.modules.sri_parser.normalizers import normalize_string, parse_money_to_cents
from sri_ats.utils.date_utils import parse_sri_date

logger = logging.getLogger(__name__)


@dataclass
class RetentionTotals:
    retencion_iva: int = 0
    retencion_renta: int = 0
    base_imponible_total: int = 0


def extract_retention_totals(impuestos: Iterable[ImpuestoRetencion]) -> RetentionTotals:
    """Códigos: 1 = Renta, 2 = IVA; otros códigos solo suman base."""
    totals = RetentionTotals()
    for impuesto in impuestos:
        valor = parse_money_to_cents(impuesto.valor_retenido)
        totals.base_imponible_total += parse_money_to_cents(impuesto.base_imponible)

        if impuesto.codigo == SRIRetentionType.RENTA:
            totals.retencion_renta += valor
        elif impuesto.codigo == SRIRetentionType.IVA:
            totals.retencion_iva += valor
    return totals


def parse_retencion(tree: Dict[str, Any], autorizacion: AuthorizationInfo, xml_hash: str) -> ParserResult:
    try:
        xml = RetencionXML.model_validate(tree["comprobanteRetencion"])
        info_tributaria = xml.info_tributaria
        info = xml.info_comp_retencion
        impuestos = xml.lineas_retencion()

        totals = extract_retention_totals(impuestos)

        document = NormalizedDocument(
            tipo=DocumentTypes.RETENCION,
            clave_acceso=normalize_string(info_tributaria.clave_acceso),
            numero_autorizacion=autorizacion.numero_autorizacion,
            fecha_autorizacion=autorizacion.fecha_autorizacion,
            ambiente=resolve_ambiente(autorizacion, info_tributaria),
            emisor=build_emisor(info_tributaria),
            receptor=Receptor(
                tipo_identificacion=normalize_string(info.tipo_identificacion_sujeto_retenido),
                identificacion=normalize_string(info.identificacion_sujeto_retenido),
                razon_social=normalize_string(info.razon_social_sujeto_retenido),
            ),
            fecha=parse_sri_date(normalize_string(info.fecha_emision)),
            # La retención no tiene total de venta: total = lo retenido
            valores=Valores(
                subtotal=totals.base_imponible_total,
                total=totals.retencion_iva + totals.retencion_renta,
            ),
            retenciones=Retenciones(iva=totals.retencion_iva, renta=totals.retencion_renta),
            xml_hash=xml_hash,
        )

        errors = validate_required_fields(document)
        warnings = []
        if not impuestos:
            warnings.append(ValidationIssue(
                code=ParserErrorCodes.NO_RETENTIONS,
                message="No se encontraron impuestos retenidos",
                field="impuestos",
            ))

        logger.debug(f"Retención {document.clave_acceso or '(sin clave)'}: "
                     f"renta={totals.retencion_renta} iva={totals.retencion_iva}")
        return build_result(document, errors, warnings)
    except Exception as e:
        return parse_error_result("retención", e)
