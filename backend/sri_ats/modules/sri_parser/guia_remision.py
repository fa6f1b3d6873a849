"""
Parser de Guía de Remisión (codDoc 06).

La guía es un documento de transporte: todos los valores son 0 y el
receptor representa al transportista, no a un comprador.
"""
import logging
from typing import Any, Dict

from sri_ats.config.sri_codes import DocumentTypes
from sri_ats.models.sri_document import (
    AuthorizationInfo, NormalizedDocument, ParserResult, Receptor, ValidationIssue, Valores
)
from sri_ats.models.sri_xml import GuiaRemisionXML
from sri_ats.modules.sri_parser.common import (
    build_emisor, build_result, parse_error_result, resolve_ambiente, validate_required_fields
)
from sri_ats.modules.sri_parser.errors import ParserErrorCodes
from sri_ats.modules.sri_parser.normalizers import normalize_string
from sri_ats.utils.date_utils import parse_sri_date

logger = logging.getLogger(__name__)


def parse_guia_remision(tree: Dict[str, Any], autorizacion: AuthorizationInfo, xml_hash: str) -> ParserResult:
    try:
        xml = GuiaRemisionXML.model_validate(tree["guiaRemision"])
        info_tributaria = xml.info_tributaria
        info = xml.info_guia_remision
        destinatarios = xml.destinatarios.destinatario

        document = NormalizedDocument(
            tipo=DocumentTypes.GUIA_REMISION,
            clave_acceso=normalize_string(info_tributaria.clave_acceso),
            numero_autorizacion=autorizacion.numero_autorizacion,
            fecha_autorizacion=autorizacion.fecha_autorizacion,
            ambiente=resolve_ambiente(autorizacion, info_tributaria),
            emisor=build_emisor(info_tributaria),
            receptor=Receptor(
                tipo_identificacion=normalize_string(info.tipo_identificacion_transportista),
                identificacion=normalize_string(info.ruc_transportista),
                razon_social=normalize_string(info.razon_social_transportista),
            ),
            fecha=parse_sri_date(normalize_string(info.fecha_ini_transporte)),
            valores=Valores(),
            xml_hash=xml_hash,
        )

        errors = validate_required_fields(document)
        warnings = []
        if not destinatarios:
            warnings.append(ValidationIssue(
                code=ParserErrorCodes.NO_DESTINATARIOS,
                message="No se encontraron destinatarios en la guía",
                field="destinatarios",
            ))
        if not normalize_string(info.placa):
            warnings.append(ValidationIssue(
                code=ParserErrorCodes.MISSING_PLACA,
                message="Placa del vehículo no encontrada",
                field="placa",
            ))

        logger.debug(f"Guía de remisión {document.clave_acceso or '(sin clave)'}: "
                     f"{len(destinatarios)} destinatario(s)")
        return build_result(document, errors, warnings)
    except Exception as e:
        return parse_error_result("guía de remisión", e)
