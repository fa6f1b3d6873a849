"""
Piezas compartidas por los parsers de cada tipo de comprobante.
"""
import logging
from typing import List, Optional

from sri_ats.models.sri_document import (
    AuthorizationInfo, Emisor, NormalizedDocument, ParserResult, ValidationIssue
)
from sri_ats.models.sri_xml import InfoTributaria
from sri_ats.modules.sri_parser.errors import ParserErrorCodes
from sri_ats.modules.sri_parser.normalizers import normalize_string
from sri_ats.modules.sri_parser.validators import validate_monetary_value

logger = logging.getLogger(__name__)


def build_emisor(info: InfoTributaria) -> Emisor:
    nombre_comercial = normalize_string(info.nombre_comercial)
    return Emisor(
        ruc=normalize_string(info.ruc),
        razon_social=normalize_string(info.razon_social),
        nombre_comercial=nombre_comercial or None,
    )


def resolve_ambiente(autorizacion: AuthorizationInfo, info: InfoTributaria) -> str:
    """Ambiente del sobre; si no viene, el declarado en infoTributaria."""
    return autorizacion.ambiente or normalize_string(info.ambiente)


def validate_required_fields(document: NormalizedDocument) -> List[ValidationIssue]:
    errors = []
    if not document.clave_acceso:
        errors.append(ValidationIssue(
            code=ParserErrorCodes.MISSING_CLAVE_ACCESO,
            message="Clave de acceso no encontrada",
            field="claveAcceso",
        ))
    if not document.emisor.ruc:
        errors.append(ValidationIssue(
            code=ParserErrorCodes.MISSING_EMISOR_RUC,
            message="RUC del emisor no encontrado",
            field="emisor.ruc",
        ))
    errors.extend(validate_amounts(document))
    return errors


def validate_amounts(document: NormalizedDocument) -> List[ValidationIssue]:
    """Todos los montos en centavos deben ser enteros no negativos."""
    errors = []
    for name, value in document.valores.model_dump().items():
        errors.extend(validate_monetary_value(value, f"valores.{name}").errors)
    if document.retenciones is not None:
        for name, value in document.retenciones.model_dump().items():
            errors.extend(validate_monetary_value(value, f"retenciones.{name}").errors)
    return errors


def build_result(
    document: NormalizedDocument,
    errors: List[ValidationIssue],
    warnings: Optional[List[ValidationIssue]] = None,
) -> ParserResult:
    ok = not errors
    return ParserResult(
        success=ok,
        document=document if ok else None,
        errors=errors or None,
        warnings=warnings or None,
    )


def parse_error_result(label: str, error: Exception) -> ParserResult:
    logger.warning(f"Error al parsear {label}: {error}")
    return ParserResult(
        success=False,
        errors=[ValidationIssue(
            code=ParserErrorCodes.PARSE_ERROR,
            message=f"Error al parsear {label}: {error}",
        )],
    )
