"""
Punto de entrada del parser de comprobantes SRI.

Pipeline: validar -> parsear -> desempaquetar sobre -> detectar tipo ->
normalizar. Cada paso puede cortar el proceso con un error tipado; nunca
se lanza una excepción hacia el llamador.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Tuple

from sri_ats.config.settings import settings
from sri_ats.config.sri_codes import DocumentTypes, SRIEstadoAutorizacion
from sri_ats.models.sri_document import AuthorizationInfo, ParserOptions, ParserResult, ValidationIssue
from sri_ats.modules.sri_parser.document_detector import (
    detect_document_type,
    extract_comprobante,
    has_document_structure,
    is_autorizacion_envelope,
)
from sri_ats.modules.sri_parser.errors import ParserErrorCodes, invalid_structure_code
from sri_ats.modules.sri_parser.factura import parse_factura
from sri_ats.modules.sri_parser.guia_remision import parse_guia_remision
from sri_ats.modules.sri_parser.normalizers import normalize_ambiente
from sri_ats.modules.sri_parser.nota_credito import parse_nota_credito
from sri_ats.modules.sri_parser.nota_debito import parse_nota_debito
from sri_ats.modules.sri_parser.retencion import parse_retencion
from sri_ats.modules.sri_parser.validators import compute_xml_hash, validate_xml
from sri_ats.modules.sri_parser.xml_tree import parse_xml_tree
from sri_ats.utils.date_utils import parse_sri_datetime

logger = logging.getLogger(__name__)

TypeParser = Callable[..., ParserResult]

# tipo -> (parser, etiqueta para mensajes de estructura inválida)
DOCUMENT_PARSERS: Dict[str, Tuple[TypeParser, str]] = {
    DocumentTypes.FACTURA: (parse_factura, "factura"),
    DocumentTypes.RETENCION: (parse_retencion, "retención"),
    DocumentTypes.NOTA_CREDITO: (parse_nota_credito, "nota de crédito"),
    DocumentTypes.NOTA_DEBITO: (parse_nota_debito, "nota de débito"),
    DocumentTypes.GUIA_REMISION: (parse_guia_remision, "guía de remisión"),
}

STRICT_PREFIX = "[Strict] "


def _failure(code: str, message: str, **extra) -> ParserResult:
    return ParserResult(success=False, errors=[ValidationIssue(code=code, message=message, **extra)])


def parse_xml(xml: str, options: Optional[ParserOptions] = None) -> ParserResult:
    """
    Parsea un XML SRI (sobre de autorización o comprobante directo).

    Args:
        xml: Texto XML
        options: ParserOptions (validate, include_warnings, strict)

    Returns:
        ParserResult con el documento normalizado o los errores encontrados
    """
    options = options or ParserOptions()

    # 1. Sintaxis
    if options.validate:
        validation = validate_xml(xml)
        if not validation.is_valid:
            return ParserResult(success=False, errors=validation.errors)

    # 2. Árbol genérico
    try:
        tree = parse_xml_tree(xml)
    except Exception as e:
        return _failure(ParserErrorCodes.XML_PARSE_ERROR, f"Error al parsear XML: {e}")

    # 3. Sobre de autorización
    comprobante_xml = xml
    autorizacion = AuthorizationInfo()

    if is_autorizacion_envelope(tree):
        envelope = extract_comprobante(tree)

        if envelope.estado != SRIEstadoAutorizacion.AUTORIZADO:
            logger.info(f"Comprobante rechazado por estado de autorización: {envelope.estado}")
            return _failure(
                ParserErrorCodes.NOT_AUTHORIZED,
                f"El documento no está autorizado. Estado: {envelope.estado}",
            )

        autorizacion = AuthorizationInfo(
            numero_autorizacion=envelope.numero_autorizacion,
            fecha_autorizacion=parse_sri_datetime(envelope.fecha_autorizacion),
            ambiente=normalize_ambiente(envelope.ambiente),
        )
        comprobante_xml = envelope.xml

        try:
            tree = parse_xml_tree(comprobante_xml)
        except Exception as e:
            return _failure(
                ParserErrorCodes.COMPROBANTE_PARSE_ERROR,
                f"Error al parsear comprobante interno: {e}",
            )

    # 4. Tipo de documento
    detection = detect_document_type(tree)
    if not detection.detected or not detection.tipo:
        return _failure(
            ParserErrorCodes.UNKNOWN_DOCUMENT_TYPE,
            detection.error or "No se pudo detectar el tipo de documento",
        )

    # 5. Hash del comprobante desempaquetado
    xml_hash = compute_xml_hash(comprobante_xml)

    # 6. Parser por tipo
    entry = DOCUMENT_PARSERS.get(detection.tipo)
    if entry is None:
        return _failure(
            ParserErrorCodes.UNSUPPORTED_DOCUMENT_TYPE,
            f"Tipo de documento no soportado: {detection.tipo}",
        )

    type_parser, label = entry
    if not has_document_structure(tree, detection.tipo):
        return _failure(invalid_structure_code(detection.tipo), f"Estructura de {label} inválida")

    result = type_parser(tree, autorizacion, xml_hash)

    # 7. Modo estricto: advertencias -> errores
    if options.strict and result.warnings:
        promoted = [
            ValidationIssue(code=w.code, message=f"{STRICT_PREFIX}{w.message}", field=w.field)
            for w in result.warnings
        ]
        return ParserResult(success=False, errors=(result.errors or []) + promoted)

    # 8. Consolidación
    return ParserResult(
        success=result.success,
        document=result.document,
        errors=result.errors or None,
        warnings=(result.warnings or None) if options.include_warnings else None,
    )


def parse_xml_batch(xmls: List[str], options: Optional[ParserOptions] = None) -> List[ParserResult]:
    """
    Parsea varios XML en paralelo. El orden de salida coincide con el de
    entrada y el fallo de un documento no afecta a los demás.
    """
    if not xmls:
        return []

    workers = max(1, min(settings.PARSER_MAX_WORKERS, len(xmls)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(lambda xml: parse_xml(xml, options), xmls))

    ok = sum(1 for r in results if r.success)
    logger.info(f"Lote parseado: {ok}/{len(results)} comprobantes válidos")
    return results


def is_valid_sri_document(xml: str) -> bool:
    """Verificación rápida: XML bien formado y con sobre o raíz SRI conocida."""
    if not validate_xml(xml).is_valid:
        return False

    try:
        tree = parse_xml_tree(xml)
    except Exception:
        return False

    if is_autorizacion_envelope(tree):
        return True
    return detect_document_type(tree).detected
