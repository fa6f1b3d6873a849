"""
Generación del reporte ATS: clasifica, agrupa y totaliza comprobantes.

Todos los totales se acumulan con sumas de enteros (centavos).
"""
import logging
import unicodedata
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sri_ats.models.ats import (
    ATSClienteAgregado,
    ATSComprasRow,
    ATSComprasSection,
    ATSGeneratorOptions,
    ATSProveedorAgregado,
    ATSReport,
    ATSResumen,
    ATSTotals,
    ATSVentasResumen,
    ATSVentasRow,
    ATSVentasSection,
    ATSVentasTotals,
    Contraparte,
)
from sri_ats.models.sri_document import NormalizedDocument
from sri_ats.modules.ats.constants import ATSReportTypes
from sri_ats.modules.ats.detector import (
    classify_documents,
    infer_contribuyente_ruc,
    separate_by_transaction_type,
)
from sri_ats.modules.ats.mapper import map_to_compras_row, map_to_ventas_row
from sri_ats.utils.date_utils import current_period

logger = logging.getLogger(__name__)

_VENTAS_TOTAL_FIELDS = tuple(ATSVentasTotals.model_fields)
_COMPRAS_TOTAL_FIELDS = tuple(ATSTotals.model_fields)


def collation_key(value: str) -> Tuple[str, str]:
    """Orden alfabético sin distinguir tildes ni mayúsculas ("Ávila" junto a "Avila")."""
    decomposed = unicodedata.normalize("NFKD", value or "")
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value or ""


def _add_row(totals, row, fields) -> None:
    for name in fields:
        setattr(totals, name, getattr(totals, name) + getattr(row, name))


def sum_compras_totals(rows: List[ATSComprasRow]) -> ATSTotals:
    totals = ATSTotals()
    for row in rows:
        _add_row(totals, row, _COMPRAS_TOTAL_FIELDS)
    return totals


def sum_ventas_totals(rows: List[ATSVentasRow]) -> ATSVentasTotals:
    totals = ATSVentasTotals()
    for row in rows:
        _add_row(totals, row, _VENTAS_TOTAL_FIELDS)
    return totals


def _count_by_tipo(rows) -> Dict[str, int]:
    por_tipo: Dict[str, int] = {}
    for row in rows:
        por_tipo[row.tipo_comprobante] = por_tipo.get(row.tipo_comprobante, 0) + 1
    return por_tipo


def infer_periodo(documents: List[NormalizedDocument]) -> str:
    """Período YYYY-MM más frecuente; empate -> el primero visto; lote vacío -> mes actual."""
    if not documents:
        return current_period()

    counts: Dict[str, int] = {}
    for doc in documents:
        period = doc.fecha[:7]
        counts[period] = counts.get(period, 0) + 1

    inferred = ""
    max_count = 0
    for period, count in counts.items():
        if count > max_count:
            inferred = period
            max_count = count
    return inferred


# =====================================================
# COMPRAS
# =====================================================

def aggregate_compras_by_proveedor(rows: List[ATSComprasRow]) -> List[ATSProveedorAgregado]:
    proveedores: Dict[str, ATSProveedorAgregado] = {}

    for row in rows:
        agregado = proveedores.get(row.identificacion)
        if agregado is None:
            agregado = ATSProveedorAgregado(proveedor=Contraparte(
                tipo_identificacion=row.tipo_identificacion,
                identificacion=row.identificacion,
                razon_social=row.razon_social,
            ))
            proveedores[row.identificacion] = agregado

        agregado.numero_comprobantes += 1
        _add_row(agregado.totales, row, _COMPRAS_TOTAL_FIELDS)
        agregado.comprobantes.append(row)

    return sorted(proveedores.values(), key=lambda a: collation_key(a.proveedor.razon_social))


def create_compras_section(documents: List[NormalizedDocument]) -> Optional[ATSComprasSection]:
    if not documents:
        return None

    filas = [map_to_compras_row(doc) for doc in documents]
    return ATSComprasSection(
        resumen=ATSResumen(
            total_comprobantes=len(filas),
            por_tipo=_count_by_tipo(filas),
            totales=sum_compras_totals(filas),
        ),
        por_proveedor=aggregate_compras_by_proveedor(filas),
        filas=filas,
    )


# =====================================================
# VENTAS
# =====================================================

def aggregate_ventas_by_cliente(rows: List[ATSVentasRow]) -> List[ATSClienteAgregado]:
    clientes: Dict[str, ATSClienteAgregado] = {}

    for row in rows:
        agregado = clientes.get(row.identificacion)
        if agregado is None:
            agregado = ATSClienteAgregado(cliente=Contraparte(
                tipo_identificacion=row.tipo_identificacion,
                identificacion=row.identificacion,
                razon_social=row.razon_social,
            ))
            clientes[row.identificacion] = agregado

        agregado.numero_comprobantes += 1
        _add_row(agregado.totales, row, _VENTAS_TOTAL_FIELDS)
        agregado.comprobantes.append(row)

    return sorted(clientes.values(), key=lambda a: collation_key(a.cliente.razon_social))


def create_ventas_section(documents: List[NormalizedDocument]) -> Optional[ATSVentasSection]:
    if not documents:
        return None

    filas = [map_to_ventas_row(doc) for doc in documents]
    return ATSVentasSection(
        resumen=ATSVentasResumen(
            total_comprobantes=len(filas),
            por_tipo=_count_by_tipo(filas),
            totales=sum_ventas_totals(filas),
        ),
        por_cliente=aggregate_ventas_by_cliente(filas),
        filas=filas,
    )


# =====================================================
# REPORTE
# =====================================================

def create_ats_report(
    documents: List[NormalizedDocument],
    options: Optional[ATSGeneratorOptions] = None,
) -> ATSReport:
    """
    Genera el reporte ATS a partir de documentos normalizados.

    Args:
        documents: Documentos parseados correctamente
        options: RUC del contribuyente y período (ambos opcionales; se infieren)

    Returns:
        ATSReport con las secciones de compras y/o ventas
    """
    options = options or ATSGeneratorOptions()

    contribuyente_ruc = options.contribuyente_ruc
    if contribuyente_ruc is None:
        contribuyente_ruc = infer_contribuyente_ruc(documents)

    classified = classify_documents(documents, contribuyente_ruc)
    compras, ventas = separate_by_transaction_type(classified)

    compras_section = create_compras_section(compras)
    ventas_section = create_ventas_section(ventas)

    tipo = ATSReportTypes.COMPLETO
    if compras_section and not ventas_section:
        tipo = ATSReportTypes.COMPRAS
    elif ventas_section and not compras_section:
        tipo = ATSReportTypes.VENTAS

    periodo = options.periodo if options.periodo is not None else infer_periodo(documents)

    logger.info(
        f"Reporte ATS {periodo} ({tipo}): {len(compras)} compras, {len(ventas)} ventas, "
        f"RUC contribuyente {contribuyente_ruc or 'no determinado'}"
    )

    return ATSReport(
        periodo=periodo,
        generado_en=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        tipo=tipo,
        compras=compras_section,
        ventas=ventas_section,
    )
