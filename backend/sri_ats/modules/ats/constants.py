"""Constantes del módulo ATS."""
import re
from typing import Dict


class TransactionTypes:
    COMPRA = "compra"
    VENTA = "venta"


class ATSReportTypes:
    COMPRAS = "compras"
    VENTAS = "ventas"
    COMPLETO = "completo"


ATS_REPORT_TYPE_LABELS: Dict[str, str] = {
    ATSReportTypes.COMPRAS: "Compras",
    ATSReportTypes.VENTAS: "Ventas",
    ATSReportTypes.COMPLETO: "Completo",
}


class ATSFileFormats:
    XLSX = "xlsx"
    CSV = "csv"


class CSVSections:
    COMPRAS = "compras"
    VENTAS = "ventas"


CSV_SECTION_VALUES = (CSVSections.COMPRAS, CSVSections.VENTAS)


class DefaultDocumentoParts:
    """Valores cuando la clave de acceso no puede descomponerse."""
    ESTABLECIMIENTO = "000"
    PUNTO_EMISION = "000"
    SECUENCIAL = "000000000"


class ATSErrorCodes:
    INVALID_REQUEST = "ATS_INVALID_REQUEST"
    INVALID_DOCUMENTS = "ATS_INVALID_DOCUMENTS"
    INVALID_FORMAT = "ATS_INVALID_FORMAT"
    INVALID_PERIODO = "ATS_INVALID_PERIODO"
    INVALID_RUC = "ATS_INVALID_RUC"
    INVALID_CSV_SECTION = "ATS_INVALID_CSV_SECTION"
    GENERATION_FAILED = "ATS_GENERATION_FAILED"


PERIODO_PATTERN = r"^[0-9]{4}-(0[1-9]|1[0-2])$"
RUC_PATTERN = r"^[0-9]{13}$"

PERIODO_REGEX = re.compile(PERIODO_PATTERN)
RUC_REGEX = re.compile(RUC_PATTERN)
