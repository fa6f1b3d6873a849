import io
import logging
import zipfile

from sri_ats.core.exceptions import ReportGenerationError
from sri_ats.models.ats import ATSReport, ExportedFile
from sri_ats.modules.exporters.csv_exporter import generate_separate_csvs

logger = logging.getLogger(__name__)

ZIP_MIME_TYPE = "application/zip"


def generate_zipped_csvs(report: ATSReport) -> ExportedFile:
    """
    Empaquetar en un ZIP los CSV de compras y ventas (solo secciones con datos)

    Raises:
        ReportGenerationError: si ninguna sección tiene filas
    """
    csv_files = generate_separate_csvs(report)
    if not csv_files:
        raise ReportGenerationError("No hay datos para generar archivos CSV")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for csv_file in csv_files:
            zf.writestr(csv_file.filename, csv_file.content)

    logger.info(f"ZIP ATS {report.periodo} generado con {len(csv_files)} CSV")
    return ExportedFile(
        content=buffer.getvalue(),
        filename=f"ATS_{report.periodo}.zip",
        mime_type=ZIP_MIME_TYPE,
    )
