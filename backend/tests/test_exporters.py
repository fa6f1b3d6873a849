import io
import zipfile

import pytest
from openpyxl import load_workbook

from sri_ats.core.exceptions import ReportGenerationError, ValidationError
from sri_ats.models.ats import ATSGeneratorOptions
from sri_ats.modules.ats.aggregator import create_ats_report
from sri_ats.modules.exporters.csv_exporter import (
    COMPRAS_HEADERS,
    UTF8_BOM,
    VENTAS_HEADERS,
    generate_csv,
    generate_separate_csvs,
)
from sri_ats.modules.exporters.excel_exporter import CURRENCY_FORMAT, XLSX_MIME_TYPE, ExcelExporter
from sri_ats.modules.exporters.zip_exporter import ZIP_MIME_TYPE, generate_zipped_csvs

from sri_samples import CLIENTE_RUC, make_document


@pytest.fixture
def compras_report(compras_documents):
    return create_ats_report(
        compras_documents,
        ATSGeneratorOptions(contribuyente_ruc=CLIENTE_RUC, periodo="2024-01"),
    )


@pytest.fixture
def completo_report(compras_documents):
    venta = make_document(
        emisor_ruc=CLIENTE_RUC, receptor_id="0912345678", receptor_tipo="05", receptor_razon="Juan Pérez"
    )
    return create_ats_report(
        compras_documents + [venta],
        ATSGeneratorOptions(contribuyente_ruc=CLIENTE_RUC, periodo="2024-01"),
    )


def _csv_lines(exported):
    text = exported.content.decode("utf-8")
    assert text.startswith(UTF8_BOM)
    return text[len(UTF8_BOM):].splitlines()


# =====================================================
# CSV
# =====================================================

def test_csv_de_compras(compras_report):
    exported = generate_csv(compras_report, "compras")

    lines = _csv_lines(exported)
    assert exported.filename == "ATS_2024-01_compras.csv"
    assert exported.mime_type.startswith("text/csv")
    assert lines[0] == ",".join(COMPRAS_HEADERS)
    assert len(lines) == 3

    first = lines[1].split(",")
    assert first[0] == "1791234567001"
    assert first[2] == "Factura"
    assert first[3] == "15/01/2024"
    assert first[4] == "001-002-000000123"
    assert first[6:12] == ["100.00", "0.00", "0.00", "12.00", "0.00", "112.00"]
    assert first[12:] == ["0.00", "0.00"]


def test_csv_de_seccion_vacia_solo_tiene_encabezados(compras_report):
    lines = _csv_lines(generate_csv(compras_report, "ventas"))

    assert lines == [",".join(VENTAS_HEADERS)]


def test_csv_escapa_comas_en_razon_social():
    report = create_ats_report(
        [make_document(emisor_ruc="1791234567001", emisor_razon="Pérez, Hijos & Cía.")],
        ATSGeneratorOptions(contribuyente_ruc=CLIENTE_RUC),
    )

    lines = _csv_lines(generate_csv(report, "compras"))

    assert '"Pérez, Hijos & Cía."' in lines[1]


def test_csv_seccion_invalida(compras_report):
    with pytest.raises(ValidationError) as exc_info:
        generate_csv(compras_report, "retenciones")

    assert exc_info.value.code == "ATS_INVALID_CSV_SECTION"


def test_zip_omite_secciones_sin_filas(compras_report):
    exported = generate_zipped_csvs(compras_report)

    assert exported.filename == "ATS_2024-01.zip"
    assert exported.mime_type == ZIP_MIME_TYPE
    with zipfile.ZipFile(io.BytesIO(exported.content)) as zf:
        assert zf.namelist() == ["ATS_2024-01_compras.csv"]
        content = zf.read("ATS_2024-01_compras.csv").decode("utf-8")
    assert content.startswith(UTF8_BOM)


def test_zip_con_ambas_secciones(completo_report):
    assert [f.filename for f in generate_separate_csvs(completo_report)] == [
        "ATS_2024-01_compras.csv",
        "ATS_2024-01_ventas.csv",
    ]

    with zipfile.ZipFile(io.BytesIO(generate_zipped_csvs(completo_report).content)) as zf:
        assert sorted(zf.namelist()) == ["ATS_2024-01_compras.csv", "ATS_2024-01_ventas.csv"]


def test_zip_sin_datos_falla():
    report = create_ats_report([], ATSGeneratorOptions(periodo="2024-01"))

    with pytest.raises(ReportGenerationError):
        generate_zipped_csvs(report)


# =====================================================
# EXCEL
# =====================================================

def test_excel_solo_crea_hojas_con_filas(compras_report):
    exported = ExcelExporter().export_report(compras_report)

    assert exported.filename == "ATS_2024-01.xlsx"
    assert exported.mime_type == XLSX_MIME_TYPE

    wb = load_workbook(io.BytesIO(exported.content))
    assert wb.sheetnames == ["Resumen", "Compras"]

    resumen = wb["Resumen"]
    assert resumen["A1"].value == "Reporte ATS - Período 2024-01"
    assert resumen["B4"].value == "Compras"
    assert resumen["A6"].value == "COMPRAS"


def test_excel_hoja_de_compras(compras_report):
    wb = load_workbook(io.BytesIO(ExcelExporter().export_report(compras_report).content))
    ws = wb["Compras"]

    assert ws["A1"].value == "RUC Proveedor"
    assert ws["A2"].value == "1791234567001"
    assert ws["E2"].value == "001-002-000000123"
    assert ws["G2"].value == 100.0
    assert ws["G2"].number_format == CURRENCY_FORMAT
    assert ws["L2"].value == 112.0
    assert ws.max_row == 3
    assert ws.freeze_panes == "A2"


def test_excel_reporte_completo(completo_report):
    wb = load_workbook(io.BytesIO(ExcelExporter().export_report(completo_report).content))

    assert wb.sheetnames == ["Resumen", "Compras", "Ventas"]
    ventas = wb["Ventas"]
    assert ventas["A1"].value == "Tipo ID"
    assert ventas["A2"].value == "05"
    assert ventas["C2"].value == "Juan Pérez"


def test_excel_reporte_vacio_solo_resumen():
    report = create_ats_report([], ATSGeneratorOptions(periodo="2024-01"))

    wb = load_workbook(io.BytesIO(ExcelExporter().export_report(report).content))

    assert wb.sheetnames == ["Resumen"]
