"""
Códigos oficiales del SRI (Ecuador) usados por el parser y el generador ATS.

Tablas de solo lectura: se comparten entre hilos sin sincronización.
"""
from typing import Dict, FrozenSet


class SRIDocType:
    """Códigos de tipo de comprobante (codDoc / clave de acceso)."""
    FACTURA = "01"
    LIQUIDACION = "03"
    NOTA_CREDITO = "04"
    NOTA_DEBITO = "05"
    GUIA_REMISION = "06"
    RETENCION = "07"


class SRITaxType:
    """Códigos de impuesto en totalConImpuestos."""
    IVA = "2"
    ICE = "3"
    IRBPNR = "5"


class SRIRetentionType:
    """Códigos de impuesto retenido en comprobanteRetencion."""
    RENTA = "1"
    IVA = "2"


class SRIAmbiente:
    PRUEBAS = "1"
    PRODUCCION = "2"


class SRIIvaRate:
    """Códigos de porcentaje IVA (codigoPorcentaje)."""
    ZERO = "0"
    TWELVE = "2"
    FOURTEEN = "3"
    FIFTEEN = "4"
    NO_OBJETO = "6"
    EXENTO = "7"


class SRITipoIdentificacion:
    RUC = "04"
    CEDULA = "05"
    PASAPORTE = "06"
    CONSUMIDOR_FINAL = "07"
    EXTERIOR = "08"


class SRIFormaPago:
    SIN_SISTEMA_FINANCIERO = "01"
    COMPENSACION_DEUDAS = "15"
    TARJETA_DEBITO = "16"
    DINERO_ELECTRONICO = "17"
    TARJETA_PREPAGO = "18"
    TARJETA_CREDITO = "19"
    OTROS_SISTEMA_FINANCIERO = "20"
    ENDOSO_TITULOS = "21"


class SRIEstadoAutorizacion:
    AUTORIZADO = "AUTORIZADO"
    NO_AUTORIZADO = "NO AUTORIZADO"


class DocumentTypes:
    """Identificadores internos de tipo de documento (no son códigos SRI)."""
    FACTURA = "factura"
    RETENCION = "retencion"
    NOTA_CREDITO = "nota_credito"
    NOTA_DEBITO = "nota_debito"
    GUIA_REMISION = "guia_remision"


# Bases IVA por grupo de tarifa
IVA_ZERO_RATES: FrozenSet[str] = frozenset({SRIIvaRate.ZERO, SRIIvaRate.NO_OBJETO, SRIIvaRate.EXENTO})
IVA_TWELVE_RATES: FrozenSet[str] = frozenset({SRIIvaRate.TWELVE})
IVA_FIFTEEN_RATES: FrozenSet[str] = frozenset({SRIIvaRate.FOURTEEN, SRIIvaRate.FIFTEEN})

DOCUMENT_TYPE_VALUES = (
    DocumentTypes.FACTURA,
    DocumentTypes.RETENCION,
    DocumentTypes.NOTA_CREDITO,
    DocumentTypes.NOTA_DEBITO,
    DocumentTypes.GUIA_REMISION,
)

AMBIENTE_VALUES = (SRIAmbiente.PRUEBAS, SRIAmbiente.PRODUCCION)

TIPO_IDENTIFICACION_VALUES = (
    SRITipoIdentificacion.RUC,
    SRITipoIdentificacion.CEDULA,
    SRITipoIdentificacion.PASAPORTE,
    SRITipoIdentificacion.CONSUMIDOR_FINAL,
    SRITipoIdentificacion.EXTERIOR,
)

FORMA_PAGO_VALUES = (
    SRIFormaPago.SIN_SISTEMA_FINANCIERO,
    SRIFormaPago.COMPENSACION_DEUDAS,
    SRIFormaPago.TARJETA_DEBITO,
    SRIFormaPago.DINERO_ELECTRONICO,
    SRIFormaPago.TARJETA_PREPAGO,
    SRIFormaPago.TARJETA_CREDITO,
    SRIFormaPago.OTROS_SISTEMA_FINANCIERO,
    SRIFormaPago.ENDOSO_TITULOS,
)

DOCUMENT_TYPE_LABELS: Dict[str, str] = {
    DocumentTypes.FACTURA: "Factura",
    DocumentTypes.RETENCION: "Retención",
    DocumentTypes.NOTA_CREDITO: "Nota de Crédito",
    DocumentTypes.NOTA_DEBITO: "Nota de Débito",
    DocumentTypes.GUIA_REMISION: "Guía de Remisión",
}

DOCUMENT_TYPE_TO_SRI_CODE: Dict[str, str] = {
    DocumentTypes.FACTURA: SRIDocType.FACTURA,
    DocumentTypes.NOTA_CREDITO: SRIDocType.NOTA_CREDITO,
    DocumentTypes.NOTA_DEBITO: SRIDocType.NOTA_DEBITO,
    DocumentTypes.GUIA_REMISION: SRIDocType.GUIA_REMISION,
    DocumentTypes.RETENCION: SRIDocType.RETENCION,
}

# La liquidación de compra se trata como factura
SRI_CODE_TO_DOCUMENT_TYPE: Dict[str, str] = {
    SRIDocType.FACTURA: DocumentTypes.FACTURA,
    SRIDocType.LIQUIDACION: DocumentTypes.FACTURA,
    SRIDocType.NOTA_CREDITO: DocumentTypes.NOTA_CREDITO,
    SRIDocType.NOTA_DEBITO: DocumentTypes.NOTA_DEBITO,
    SRIDocType.GUIA_REMISION: DocumentTypes.GUIA_REMISION,
    SRIDocType.RETENCION: DocumentTypes.RETENCION,
}
