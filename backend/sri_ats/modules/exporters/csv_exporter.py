"""
Exportación del reporte ATS a CSV (una sección por archivo).

UTF-8 con BOM para que Excel reconozca tildes; montos con 2 decimales y
fechas DD/MM/YYYY.
"""
import csv
import io
import logging
from typing import List

from sri_ats.config.sri_codes import DOCUMENT_TYPE_LABELS
from sri_ats.core.exceptions import ValidationError
from sri_ats.models.ats import ATSComprasRow, ATSReport, ATSVentasRow, ExportedFile
from sri_ats.modules.ats.constants import ATSErrorCodes, CSV_SECTION_VALUES, CSVSections
from sri_ats.modules.ats.mapper import get_numero_documento
from sri_ats.modules.sri_parser.normalizers import format_money
from sri_ats.utils.date_utils import format_to_sri_date

logger = logging.getLogger(__name__)

CSV_MIME_TYPE = "text/csv;charset=utf-8"
UTF8_BOM = "\ufeff"

COMPRAS_HEADERS = [
    "RUC Proveedor",
    "Razón Social",
    "Tipo Documento",
    "Fecha Emisión",
    "Número Documento",
    "Autorización",
    "Base IVA Gravada",
    "Base IVA 0%",
    "Base No Objeto",
    "Monto IVA",
    "Monto ICE",
    "Total",
    "Retención IVA",
    "Retención Renta",
]

VENTAS_HEADERS = [
    "Tipo ID",
    "Identificación",
    "Razón Social",
    "Tipo Documento",
    "Fecha Emisión",
    "Número Documento",
    "Autorización",
    "Base IVA Gravada",
    "Base IVA 0%",
    "Base No Objeto",
    "Monto IVA",
    "Monto ICE",
    "Total",
]


def _document_values(row) -> List[str]:
    return [
        DOCUMENT_TYPE_LABELS.get(row.tipo_comprobante, row.tipo_comprobante),
        format_to_sri_date(row.fecha_emision),
        get_numero_documento(row),
        row.autorizacion,
        format_money(row.base_iva_gravada),
        format_money(row.base_iva0),
        format_money(row.base_no_objeto_iva),
        format_money(row.monto_iva),
        format_money(row.monto_ice),
        format_money(row.total),
    ]


def compras_row_values(row: ATSComprasRow) -> List[str]:
    return [
        row.identificacion,
        row.razon_social,
        *_document_values(row),
        format_money(row.retencion_iva),
        format_money(row.retencion_renta),
    ]


def ventas_row_values(row: ATSVentasRow) -> List[str]:
    return [
        row.tipo_identificacion,
        row.identificacion,
        row.razon_social,
        *_document_values(row),
    ]


def _to_csv(headers: List[str], rows: List[List[str]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()


def generate_csv(report: ATSReport, section: str) -> ExportedFile:
    """
    Generar el CSV de una sección del reporte

    Args:
        report: Reporte ATS
        section: "compras" o "ventas"

    Returns:
        ExportedFile con el CSV (solo encabezados si la sección está vacía)
    """
    if section not in CSV_SECTION_VALUES:
        raise ValidationError(
            f"Sección CSV inválida: {section}",
            details={"section": section},
            code=ATSErrorCodes.INVALID_CSV_SECTION,
        )

    if section == CSVSections.COMPRAS:
        filas = report.compras.filas if report.compras else []
        content = _to_csv(COMPRAS_HEADERS, [compras_row_values(row) for row in filas])
    else:
        filas = report.ventas.filas if report.ventas else []
        content = _to_csv(VENTAS_HEADERS, [ventas_row_values(row) for row in filas])

    logger.debug(f"CSV {section} generado con {len(filas)} filas")
    return ExportedFile(
        content=(UTF8_BOM + content).encode("utf-8"),
        filename=f"ATS_{report.periodo}_{section}.csv",
        mime_type=CSV_MIME_TYPE,
    )


def generate_separate_csvs(report: ATSReport) -> List[ExportedFile]:
    """Un CSV por sección con datos; las secciones vacías se omiten."""
    files = []
    if report.compras and report.compras.filas:
        files.append(generate_csv(report, CSVSections.COMPRAS))
    if report.ventas and report.ventas.filas:
        files.append(generate_csv(report, CSVSections.VENTAS))
    return files
