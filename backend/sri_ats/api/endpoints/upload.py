from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse
import logging
from typing import Optional

from sri_ats.config.settings import settings
from sri_ats.models.sri_document import ParserOptions
from sri_ats.modules.zip_processor.processor import process_zip_file

router = APIRouter()
logger = logging.getLogger(__name__)

ALLOWED_ZIP_MIME_TYPES = (
    "application/zip",
    "application/x-zip-compressed",
    "application/x-zip",
    "multipart/x-zip",
)


class UploadErrorCodes:
    NO_FILE = "NO_FILE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    PROCESSING_FAILED = "PROCESSING_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def _error(code: str, message: str, status_code: int, data=None) -> JSONResponse:
    content = {"success": False, "error": {"code": code, "message": message}}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


@router.post("/upload")
async def upload_zip(file: Optional[UploadFile] = File(None)):
    """
    Procesa un ZIP con comprobantes XML del SRI.

    Devuelve el resultado por archivo; si todos los XML fallan responde 422
    con el detalle en data.
    """
    if file is None or not file.filename:
        return _error(UploadErrorCodes.NO_FILE, "No se proporcionó ningún archivo", 400)

    content = await file.read()

    if len(content) > settings.MAX_ZIP_FILE_SIZE:
        max_mb = settings.MAX_ZIP_FILE_SIZE // (1024 * 1024)
        return _error(
            UploadErrorCodes.FILE_TOO_LARGE,
            f"El archivo excede el tamaño máximo de {max_mb}MB",
            400,
        )

    is_zip_mime = (file.content_type or "") in ALLOWED_ZIP_MIME_TYPES
    if not is_zip_mime and not file.filename.lower().endswith(".zip"):
        return _error(UploadErrorCodes.INVALID_FILE_TYPE, "El archivo debe ser un ZIP válido", 400)

    try:
        result = process_zip_file(content, ParserOptions(strict=settings.PARSER_STRICT_DEFAULT))
    except Exception as e:
        logger.error(f"Error procesando ZIP {file.filename}: {e}")
        return _error(UploadErrorCodes.INTERNAL_ERROR, "Error interno del servidor", 500)

    data = result.model_dump(mode="json", by_alias=True)

    if result.processed == 0 and result.failed > 0:
        message = result.errors[0].message if result.errors else "Error al procesar el archivo ZIP"
        return _error(UploadErrorCodes.PROCESSING_FAILED, message, 422, data)

    logger.info(f"Upload {file.filename}: {result.processed} procesados, {result.failed} fallidos")
    return {"success": True, "data": data}
