"""
Conversión de NormalizedDocument a filas ATS.
"""
from typing import Dict, Union

from sri_ats.config.sri_codes import DOCUMENT_TYPE_TO_SRI_CODE, SRIDocType, SRITipoIdentificacion
from sri_ats.models.ats import ATSComprasRow, ATSVentasRow
from sri_ats.models.sri_document import NormalizedDocument
from sri_ats.modules.ats.constants import DefaultDocumentoParts
from sri_ats.modules.sri_parser.clave_acceso import parse_clave_acceso
from sri_ats.modules.sri_parser.normalizers import format_document_number


def get_codigo_comprobante(tipo: str) -> str:
    return DOCUMENT_TYPE_TO_SRI_CODE.get(tipo, SRIDocType.FACTURA)


def _document_fields(doc: NormalizedDocument) -> Dict[str, Union[str, int]]:
    """Campos comunes a compras y ventas: numeración y bases imponibles."""
    parts = parse_clave_acceso(doc.clave_acceso)
    valores = doc.valores

    base_iva_gravada = valores.iva12 + valores.iva15
    base_iva0 = valores.iva0
    # La base no objeto es el remanente del subtotal; nunca negativa
    base_no_objeto_iva = max(0, valores.subtotal - base_iva_gravada - base_iva0)

    return {
        "tipo_comprobante": doc.tipo,
        "codigo_comprobante": get_codigo_comprobante(doc.tipo),
        "fecha_emision": doc.fecha,
        "establecimiento": parts.establecimiento if parts else DefaultDocumentoParts.ESTABLECIMIENTO,
        "punto_emision": parts.punto_emision if parts else DefaultDocumentoParts.PUNTO_EMISION,
        "secuencial": parts.secuencial if parts else DefaultDocumentoParts.SECUENCIAL,
        "autorizacion": doc.numero_autorizacion,
        "clave_acceso": doc.clave_acceso,
        "base_iva_gravada": base_iva_gravada,
        "base_iva0": base_iva0,
        "base_no_objeto_iva": base_no_objeto_iva,
        "monto_iva": valores.iva,
        "monto_ice": valores.ice,
        "total": valores.total,
    }


def map_to_compras_row(doc: NormalizedDocument) -> ATSComprasRow:
    """Compra: la contraparte es el emisor (proveedor), siempre identificado con RUC."""
    retenciones = doc.retenciones
    return ATSComprasRow(
        tipo_identificacion=SRITipoIdentificacion.RUC,
        identificacion=doc.emisor.ruc,
        razon_social=doc.emisor.razon_social,
        retencion_iva=retenciones.iva if retenciones else 0,
        retencion_renta=retenciones.renta if retenciones else 0,
        forma_pago=doc.forma_pago,
        **_document_fields(doc),
    )


def map_to_ventas_row(doc: NormalizedDocument) -> ATSVentasRow:
    """Venta: la contraparte es el receptor (cliente)."""
    return ATSVentasRow(
        tipo_identificacion=doc.receptor.tipo_identificacion,
        identificacion=doc.receptor.identificacion,
        razon_social=doc.receptor.razon_social,
        **_document_fields(doc),
    )


def format_numero_documento(establecimiento: str, punto_emision: str, secuencial: str) -> str:
    """EEE-PPP-SSSSSSSSS"""
    return format_document_number(establecimiento, punto_emision, secuencial)


def get_numero_documento(row: Union[ATSComprasRow, ATSVentasRow]) -> str:
    return format_numero_documento(row.establecimiento, row.punto_emision, row.secuencial)
