"""
Modelos del reporte ATS (Anexo Transaccional Simplificado).

Montos en centavos (int). Las filas se construyen una vez por documento y
los totales se acumulan solo con sumas enteras.
"""
from typing import Dict, List, Optional

from pydantic import Field

from sri_ats.models.sri_document import CamelModel, NormalizedDocument


# =====================================================
# FILAS
# =====================================================

class ATSRowBase(CamelModel):
    tipo_identificacion: str
    identificacion: str
    razon_social: str
    tipo_comprobante: str           # tipo interno (factura, retencion, ...)
    codigo_comprobante: str         # código SRI (01, 04, 05, 06, 07)
    fecha_emision: str              # YYYY-MM-DD
    establecimiento: str
    punto_emision: str
    secuencial: str
    autorizacion: str
    clave_acceso: str
    base_iva_gravada: int = 0
    base_iva0: int = 0
    base_no_objeto_iva: int = 0
    monto_iva: int = 0
    monto_ice: int = 0
    total: int = 0


class ATSComprasRow(ATSRowBase):
    retencion_iva: int = 0
    retencion_renta: int = 0
    forma_pago: Optional[str] = None


class ATSVentasRow(ATSRowBase):
    pass


# =====================================================
# TOTALES Y AGREGADOS
# =====================================================

class ATSVentasTotals(CamelModel):
    base_iva_gravada: int = 0
    base_iva0: int = 0
    base_no_objeto_iva: int = 0
    monto_iva: int = 0
    monto_ice: int = 0
    total: int = 0


class ATSTotals(ATSVentasTotals):
    retencion_iva: int = 0
    retencion_renta: int = 0


class Contraparte(CamelModel):
    tipo_identificacion: str
    identificacion: str
    razon_social: str


class ATSProveedorAgregado(CamelModel):
    proveedor: Contraparte
    numero_comprobantes: int = 0
    totales: ATSTotals = Field(default_factory=ATSTotals)
    comprobantes: List[ATSComprasRow] = Field(default_factory=list)


class ATSClienteAgregado(CamelModel):
    cliente: Contraparte
    numero_comprobantes: int = 0
    totales: ATSVentasTotals = Field(default_factory=ATSVentasTotals)
    comprobantes: List[ATSVentasRow] = Field(default_factory=list)


class ATSResumen(CamelModel):
    total_comprobantes: int = 0
    por_tipo: Dict[str, int] = Field(default_factory=dict)
    totales: ATSTotals = Field(default_factory=ATSTotals)


class ATSVentasResumen(CamelModel):
    total_comprobantes: int = 0
    por_tipo: Dict[str, int] = Field(default_factory=dict)
    totales: ATSVentasTotals = Field(default_factory=ATSVentasTotals)


# =====================================================
# SECCIONES Y REPORTE
# =====================================================

class ATSComprasSection(CamelModel):
    resumen: ATSResumen
    por_proveedor: List[ATSProveedorAgregado]
    filas: List[ATSComprasRow]


class ATSVentasSection(CamelModel):
    resumen: ATSVentasResumen
    por_cliente: List[ATSClienteAgregado]
    filas: List[ATSVentasRow]


class ATSReport(CamelModel):
    periodo: str
    generado_en: str
    tipo: str
    compras: Optional[ATSComprasSection] = None
    ventas: Optional[ATSVentasSection] = None


class ClassifiedDocument(CamelModel):
    document: NormalizedDocument
    transaction_type: str


class ATSGeneratorOptions(CamelModel):
    contribuyente_ruc: Optional[str] = None
    periodo: Optional[str] = None


class ExportedFile(CamelModel):
    """Archivo generado (xlsx, csv o zip) listo para descarga."""
    content: bytes
    filename: str
    mime_type: str
