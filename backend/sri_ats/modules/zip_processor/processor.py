"""
Procesamiento completo de un ZIP: extracción + parseo en lote.
"""
import base64
import binascii
import logging
from typing import Optional

from sri_ats.models.sri_document import ParserOptions
from sri_ats.models.zip_batch import BatchProcessResult, FileProcessResult, ZipError
from sri_ats.modules.sri_parser.xml_parser import parse_xml_batch
from sri_ats.modules.zip_processor.errors import ZipErrorCodes
from sri_ats.modules.zip_processor.extractor import extract_xmls_from_zip

logger = logging.getLogger(__name__)


def process_zip_file(data: bytes, options: Optional[ParserOptions] = None) -> BatchProcessResult:
    """
    Procesa un ZIP con comprobantes SRI.

    Un comprobante que falla no detiene el lote: se cuenta en failed y sus
    errores se agregan a errors con el nombre del archivo.
    """
    extraction = extract_xmls_from_zip(data)

    if extraction.is_failure():
        skipped = extraction.details.get("skipped", [])
        return BatchProcessResult(
            total_files=len(skipped),
            skipped=skipped,
            errors=[ZipError(code=extraction.code, message=extraction.error)],
        )

    extracted = extraction.value
    xml_files = extracted.files
    parse_results = parse_xml_batch([f.content for f in xml_files], options)

    results = []
    errors = list(extracted.errors)
    processed = 0
    failed = 0

    for file, result in zip(xml_files, parse_results):
        results.append(FileProcessResult(filename=file.filename, result=result))

        if result.success:
            processed += 1
            continue

        failed += 1
        for error in result.errors or []:
            errors.append(ZipError(
                code=ZipErrorCodes.EXTRACTION_FAILED,
                message=f"Error al procesar {file.filename}: {error.message}",
                filename=file.filename,
            ))

    logger.info(f"ZIP procesado: {processed} válidos, {failed} fallidos, {len(extracted.skipped)} omitidos")
    return BatchProcessResult(
        total_files=len(xml_files) + len(extracted.skipped),
        xml_files=len(xml_files),
        processed=processed,
        failed=failed,
        skipped=extracted.skipped,
        results=results,
        errors=errors,
    )


def process_zip_file_from_base64(encoded: str, options: Optional[ParserOptions] = None) -> BatchProcessResult:
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        return BatchProcessResult(errors=[ZipError(
            code=ZipErrorCodes.INVALID_ZIP,
            message=f"Error al decodificar base64: {e}",
        )])
    return process_zip_file(data, options)
