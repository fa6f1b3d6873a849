"""
Extracción de XML desde un archivo ZIP.
"""
import io
import logging
import zipfile

from sri_ats.core.result import Result, failure, success
from sri_ats.models.zip_batch import ExtractedFile, ZipError, ZipExtraction
from sri_ats.modules.zip_processor.errors import ZipErrorCodes

logger = logging.getLogger(__name__)

ZIP_SIGNATURE = b"PK"


def extract_xmls_from_zip(data: bytes) -> Result[ZipExtraction]:
    """
    Extrae los archivos .xml (sin distinguir mayúsculas) de un ZIP.

    Directorios y archivos no XML se listan en skipped. Un XML que no es
    UTF-8 válido se reporta como EXTRACTION_FAILED sin detener el resto.

    Returns:
        Success(ZipExtraction) o Failure con EMPTY_ZIP, INVALID_ZIP o
        NO_XML_FILES (details["skipped"] lista lo omitido)
    """
    if not data:
        return failure("El archivo ZIP está vacío", code=ZipErrorCodes.EMPTY_ZIP)

    if len(data) < 4 or not data.startswith(ZIP_SIGNATURE):
        return failure("El archivo no es un ZIP válido", code=ZipErrorCodes.INVALID_ZIP)

    extraction = ZipExtraction()

    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            for info in zf.infolist():
                filename = info.filename

                if info.is_dir() or not filename.lower().endswith(".xml"):
                    extraction.skipped.append(filename)
                    continue

                raw = zf.read(info)
                try:
                    # utf-8-sig descarta el BOM si existe
                    content = raw.decode("utf-8-sig")
                except UnicodeDecodeError as e:
                    logger.warning(f"No se pudo decodificar {filename}: {e}")
                    extraction.errors.append(ZipError(
                        code=ZipErrorCodes.EXTRACTION_FAILED,
                        message=f"Error al decodificar archivo {filename}: {e}",
                        filename=filename,
                    ))
                    continue

                extraction.files.append(ExtractedFile(filename=filename, content=content, size=len(raw)))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, RuntimeError, OSError) as e:
        logger.warning(f"ZIP inválido: {e}")
        return failure(f"Error al descomprimir ZIP: {e}", code=ZipErrorCodes.INVALID_ZIP)

    if not extraction.files and not extraction.errors:
        return failure(
            "El ZIP no contiene archivos XML",
            code=ZipErrorCodes.NO_XML_FILES,
            details={"skipped": extraction.skipped},
        )

    logger.info(f"ZIP extraído: {len(extraction.files)} XML, {len(extraction.skipped)} omitidos, "
                f"{len(extraction.errors)} con error")
    return success(extraction)
