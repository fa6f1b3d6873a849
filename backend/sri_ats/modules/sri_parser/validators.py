"""
Validación de XML y de campos de comprobantes SRI.
"""
import hashlib
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List

from sri_ats.models.sri_document import ValidationIssue
from sri_ats.modules.sri_parser.errors import ParserErrorCodes
from sri_ats.modules.sri_parser.normalizers import is_valid_ruc_format
from sri_ats.utils.date_utils import now_local, try_parse_date

logger = logging.getLogger(__name__)

_CLAVE_ACCESO = re.compile(r"[0-9]{49}")
_AUTORIZACION_37 = re.compile(r"[0-9]{37}")


@dataclass
class FieldValidation:
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)


def _result(errors: List[ValidationIssue]) -> FieldValidation:
    return FieldValidation(is_valid=not errors, errors=errors)


def validate_xml(xml: str) -> FieldValidation:
    """Verifica que el XML esté bien formado; incluye línea/columna del error."""
    if not xml or not isinstance(xml, str):
        return _result([ValidationIssue(
            code=ParserErrorCodes.EMPTY_XML,
            message="El XML está vacío o no es válido",
        )])

    try:
        ET.fromstring(xml)
    except ET.ParseError as e:
        line, col = getattr(e, "position", (None, None))
        logger.debug(f"XML mal formado en línea {line}, columna {col}: {e}")
        return _result([ValidationIssue(
            code=ParserErrorCodes.XML_SYNTAX_ERROR,
            message=f"XML mal formado: {e}",
            line=line,
            col=col,
        )])

    return _result([])


def compute_xml_hash(xml: str) -> str:
    """SHA-256 hex del XML (UTF-8)."""
    return hashlib.sha256(xml.encode("utf-8")).hexdigest()


def validate_clave_acceso(clave: str) -> FieldValidation:
    if not clave:
        return _result([ValidationIssue(
            code=ParserErrorCodes.MISSING_CLAVE,
            message="Clave de acceso no proporcionada",
            field="claveAcceso",
        )])

    errors = []
    if not _CLAVE_ACCESO.fullmatch(clave):
        errors.append(ValidationIssue(
            code=ParserErrorCodes.INVALID_CLAVE_FORMAT,
            message="La clave de acceso debe tener 49 dígitos numéricos",
            field="claveAcceso",
        ))
    return _result(errors)


def validate_numero_autorizacion(numero: str) -> FieldValidation:
    if not numero:
        return _result([ValidationIssue(
            code=ParserErrorCodes.MISSING_AUTORIZACION,
            message="Número de autorización no proporcionado",
            field="numeroAutorizacion",
        )])

    errors = []
    # 37 dígitos (formato anterior) o 49 (igual a la clave de acceso)
    if not _AUTORIZACION_37.fullmatch(numero) and not _CLAVE_ACCESO.fullmatch(numero):
        errors.append(ValidationIssue(
            code=ParserErrorCodes.INVALID_AUTORIZACION_FORMAT,
            message="El número de autorización debe tener 37 o 49 dígitos",
            field="numeroAutorizacion",
        ))
    return _result(errors)


def validate_ruc(ruc: str) -> FieldValidation:
    """RUC: 13 dígitos, provincia 01-24 o 30, termina en 001."""
    if not ruc:
        return _result([ValidationIssue(
            code=ParserErrorCodes.MISSING_RUC,
            message="RUC no proporcionado",
            field="ruc",
        )])

    if not is_valid_ruc_format(ruc):
        return _result([ValidationIssue(
            code=ParserErrorCodes.INVALID_RUC_FORMAT,
            message="El RUC debe tener 13 dígitos numéricos",
            field="ruc",
        )])

    errors = []
    province = int(ruc[:2])
    if not (1 <= province <= 24) and province != 30:
        errors.append(ValidationIssue(
            code=ParserErrorCodes.INVALID_PROVINCE_CODE,
            message="Código de provincia inválido en el RUC",
            field="ruc",
        ))

    if not ruc.endswith("001"):
        errors.append(ValidationIssue(
            code=ParserErrorCodes.INVALID_RUC_SUFFIX,
            message="El RUC debe terminar en 001",
            field="ruc",
        ))
    return _result(errors)


def validate_document_date(iso_date: str, field_name: str = "fechaEmision") -> FieldValidation:
    """La fecha no puede ser posterior a hoy (zona horaria configurada)."""
    if not iso_date:
        return _result([ValidationIssue(
            code=ParserErrorCodes.MISSING_DATE,
            message="Fecha no proporcionada",
            field=field_name,
        )])

    errors = []
    parsed = try_parse_date(iso_date)
    if parsed and parsed.date() > now_local().date():
        errors.append(ValidationIssue(
            code=ParserErrorCodes.FUTURE_DATE,
            message="La fecha del documento no puede ser futura",
            field=field_name,
        ))
    return _result(errors)


def validate_monetary_value(value, field_name: str) -> FieldValidation:
    """Montos en centavos: enteros y no negativos."""
    if not isinstance(value, int) or isinstance(value, bool):
        return _result([ValidationIssue(
            code=ParserErrorCodes.INVALID_MONETARY_VALUE,
            message=f"Valor monetario inválido: {field_name}",
            field=field_name,
        )])

    errors = []
    if value < 0:
        errors.append(ValidationIssue(
            code=ParserErrorCodes.NEGATIVE_VALUE,
            message=f"El valor de {field_name} no puede ser negativo",
            field=field_name,
        ))
    return _result(errors)
