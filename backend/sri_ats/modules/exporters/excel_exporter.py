import io
import logging
from datetime import datetime
from typing import Any, Callable, List, NamedTuple, Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from sri_ats.config.settings import settings
from sri_ats.config.sri_codes import DOCUMENT_TYPE_LABELS
from sri_ats.models.ats import ATSComprasRow, ATSReport, ATSVentasRow, ExportedFile
from sri_ats.modules.ats.constants import ATS_REPORT_TYPE_LABELS
from sri_ats.modules.ats.mapper import get_numero_documento
from sri_ats.modules.sri_parser.normalizers import cents_to_dollars
from sri_ats.utils.date_utils import format_to_sri_date

logger = logging.getLogger(__name__)

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CURRENCY_FORMAT = '"$"#,##0.00'

Row = Union[ATSComprasRow, ATSVentasRow]


class Column(NamedTuple):
    header: str
    width: int
    value: Callable[[Row], Any]
    money: bool = False


def _tipo_doc(row: Row) -> str:
    return DOCUMENT_TYPE_LABELS.get(row.tipo_comprobante, row.tipo_comprobante)


def _money(field: str) -> Callable[[Row], float]:
    return lambda row: cents_to_dollars(getattr(row, field))


_DOCUMENT_COLUMNS = [
    Column("Tipo Doc.", 12, _tipo_doc),
    Column("Fecha Emisión", 14, lambda r: format_to_sri_date(r.fecha_emision)),
    Column("Número Documento", 20, get_numero_documento),
    Column("Autorización", 50, lambda r: r.autorizacion),
    Column("Base IVA Gravada", 16, _money("base_iva_gravada"), True),
    Column("Base IVA 0%", 14, _money("base_iva0"), True),
    Column("Base No Objeto", 14, _money("base_no_objeto_iva"), True),
    Column("Monto IVA", 12, _money("monto_iva"), True),
    Column("Monto ICE", 12, _money("monto_ice"), True),
    Column("Total", 14, _money("total"), True),
]

COMPRAS_COLUMNS = [
    Column("RUC Proveedor", 16, lambda r: r.identificacion),
    Column("Razón Social", 35, lambda r: r.razon_social),
    *_DOCUMENT_COLUMNS,
    Column("Ret. IVA", 12, _money("retencion_iva"), True),
    Column("Ret. Renta", 12, _money("retencion_renta"), True),
]

VENTAS_COLUMNS = [
    Column("Tipo ID", 10, lambda r: r.tipo_identificacion),
    Column("Identificación", 16, lambda r: r.identificacion),
    Column("Razón Social", 35, lambda r: r.razon_social),
    *_DOCUMENT_COLUMNS,
]


class ExcelExporter:
    """Exportación del reporte ATS a Excel (hojas Resumen, Compras y Ventas)"""

    def __init__(self):
        self.workbook: Optional[Workbook] = None
        self._setup_styles()

    def export_report(self, report: ATSReport) -> ExportedFile:
        """
        Generar el libro Excel de un reporte ATS

        Args:
            report: Reporte ATS generado

        Returns:
            ExportedFile con el contenido xlsx
        """
        try:
            self.workbook = Workbook()
            self.workbook.properties.creator = settings.XLSX_CREATOR
            self.workbook.properties.created = datetime.now()

            self._write_resumen(self.workbook.active, report)

            # Las hojas de detalle solo se crean si hay filas
            if report.compras and report.compras.filas:
                ws = self.workbook.create_sheet("Compras")
                self._write_table(ws, COMPRAS_COLUMNS, report.compras.filas)

            if report.ventas and report.ventas.filas:
                ws = self.workbook.create_sheet("Ventas")
                self._write_table(ws, VENTAS_COLUMNS, report.ventas.filas)

            buffer = io.BytesIO()
            self.workbook.save(buffer)
            buffer.seek(0)

            logger.info(f"Excel ATS generado para período {report.periodo} "
                        f"({len(self.workbook.sheetnames)} hojas)")
            return ExportedFile(
                content=buffer.getvalue(),
                filename=f"ATS_{report.periodo}.xlsx",
                mime_type=XLSX_MIME_TYPE,
            )

        except Exception as e:
            logger.error(f"Error generando Excel ATS: {e}")
            raise

    def _setup_styles(self):
        """Configurar estilos base"""
        self.header_font = Font(bold=True, color="FFFFFF", size=11)
        self.header_fill = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
        self.header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        self.data_alignment = Alignment(vertical="center")

        self.thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin")
        )

        self.title_font = Font(bold=True, size=16)
        self.section_font = Font(bold=True, size=14)
        self.label_font = Font(bold=True)

    def _write_resumen(self, ws: Worksheet, report: ATSReport):
        ws.title = "Resumen"

        ws.merge_cells("A1:D1")
        ws["A1"] = f"Reporte ATS - Período {report.periodo}"
        ws["A1"].font = self.title_font
        ws["A1"].alignment = Alignment(horizontal="center")

        ws["A3"] = "Generado:"
        ws["A3"].font = self.label_font
        ws["B3"] = self._format_generado(report.generado_en)

        ws["A4"] = "Tipo:"
        ws["A4"].font = self.label_font
        ws["B4"] = ATS_REPORT_TYPE_LABELS.get(report.tipo, report.tipo)

        current_row = 6

        if report.compras:
            totales = report.compras.resumen.totales
            current_row = self._write_summary_block(ws, current_row, "COMPRAS", [
                ("Total comprobantes:", report.compras.resumen.total_comprobantes, False),
                ("Base IVA Gravada:", totales.base_iva_gravada, True),
                ("Base IVA 0%:", totales.base_iva0, True),
                ("Monto IVA:", totales.monto_iva, True),
                ("Total:", totales.total, True),
                ("Retención IVA:", totales.retencion_iva, True),
                ("Retención Renta:", totales.retencion_renta, True),
            ])
            current_row += 1

        if report.ventas:
            totales = report.ventas.resumen.totales
            self._write_summary_block(ws, current_row, "VENTAS", [
                ("Total comprobantes:", report.ventas.resumen.total_comprobantes, False),
                ("Base IVA Gravada:", totales.base_iva_gravada, True),
                ("Base IVA 0%:", totales.base_iva0, True),
                ("Monto IVA:", totales.monto_iva, True),
                ("Total:", totales.total, True),
            ])

        ws.column_dimensions["A"].width = 20
        ws.column_dimensions["B"].width = 25

    def _write_summary_block(self, ws: Worksheet, row: int, title: str, items: List[tuple]) -> int:
        """Escribe un bloque etiqueta/valor y devuelve la siguiente fila libre"""
        ws.cell(row=row, column=1, value=title).font = self.section_font
        row += 1

        for label, value, is_money in items:
            ws.cell(row=row, column=1, value=label)
            cell = ws.cell(row=row, column=2, value=cents_to_dollars(value) if is_money else value)
            if is_money:
                cell.number_format = CURRENCY_FORMAT
            if label == "Total:":
                cell.font = self.label_font
            row += 1

        return row

    def _write_table(self, ws: Worksheet, columns: List[Column], rows: List[Row]):
        for col_idx, column in enumerate(columns, 1):
            cell = ws.cell(row=1, column=col_idx, value=column.header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.header_alignment
            cell.border = self.thin_border
            ws.column_dimensions[get_column_letter(col_idx)].width = column.width
        ws.row_dimensions[1].height = 30

        for row_idx, row in enumerate(rows, 2):
            for col_idx, column in enumerate(columns, 1):
                cell = ws.cell(row=row_idx, column=col_idx, value=column.value(row))
                cell.alignment = self.data_alignment
                cell.border = self.thin_border
                if column.money:
                    cell.number_format = CURRENCY_FORMAT

        ws.freeze_panes = "A2"
        ws.auto_filter.ref = f"A1:{get_column_letter(len(columns))}{len(rows) + 1}"

    @staticmethod
    def _format_generado(generado_en: str) -> str:
        try:
            return datetime.fromisoformat(generado_en.replace("Z", "+00:00")).strftime("%d/%m/%Y %H:%M:%S")
        except ValueError:
            return generado_en
