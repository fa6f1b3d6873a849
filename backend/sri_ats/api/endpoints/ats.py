from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import logging

from sri_ats.api.schemas import GenerateATSRequest
from sri_ats.core.exceptions import SriAtsError
from sri_ats.models.ats import ExportedFile
from sri_ats.modules.ats.aggregator import create_ats_report
from sri_ats.modules.ats.constants import ATSErrorCodes, ATSFileFormats
from sri_ats.modules.exporters.csv_exporter import generate_csv
from sri_ats.modules.exporters.excel_exporter import ExcelExporter
from sri_ats.modules.exporters.zip_exporter import generate_zipped_csvs

router = APIRouter()
logger = logging.getLogger(__name__)


def error_code_from_loc(loc) -> str:
    """Ubicación del error de validación -> código ATS."""
    path = ".".join(str(part) for part in loc)

    if path.startswith("documents"):
        return ATSErrorCodes.INVALID_DOCUMENTS
    if "formato" in path:
        return ATSErrorCodes.INVALID_FORMAT
    if "periodo" in path:
        return ATSErrorCodes.INVALID_PERIODO
    if "contribuyenteRuc" in path:
        return ATSErrorCodes.INVALID_RUC
    if "csvSection" in path:
        return ATSErrorCodes.INVALID_CSV_SECTION
    return ATSErrorCodes.INVALID_REQUEST


def _error(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message}},
    )


def _file_response(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.post("/ats/generate")
async def generate_ats(request: Request):
    """
    Genera el reporte ATS a partir de documentos ya parseados.

    - formato "xlsx" (por defecto): un archivo Excel
    - formato "csv" con csvSection: un CSV de esa sección
    - formato "csv" sin csvSection: ZIP con un CSV por sección con datos
    """
    try:
        body = await request.json()
    except ValueError:
        return _error(ATSErrorCodes.INVALID_REQUEST, "El cuerpo de la solicitud no es JSON válido", 400)

    try:
        payload = GenerateATSRequest.model_validate(body)
    except PydanticValidationError as e:
        first = e.errors()[0]
        return _error(error_code_from_loc(first["loc"]), first["msg"], 400)

    options = payload.options
    formato = options.formato or ATSFileFormats.XLSX

    logger.info(f"Generando reporte ATS: {len(payload.documents)} documentos, formato={formato}, "
                f"periodo={options.periodo}, ruc={options.contribuyente_ruc}")

    try:
        report = create_ats_report(payload.documents, options.generator_options())

        if formato == ATSFileFormats.XLSX:
            exported = ExcelExporter().export_report(report)
        elif options.csv_section:
            exported = generate_csv(report, options.csv_section)
        else:
            exported = generate_zipped_csvs(report)
    except SriAtsError:
        raise
    except Exception as e:
        logger.error(f"Error al generar el reporte ATS: {e}")
        return _error(ATSErrorCodes.GENERATION_FAILED, "Error al generar el reporte ATS", 500)

    logger.info(f"Archivo ATS generado: {exported.filename} ({len(exported.content)} bytes)")
    return _file_response(exported)
