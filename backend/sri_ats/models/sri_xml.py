"""
Estructuras tipadas de los comprobantes SRI (esquemas XML v1.x / v2.x).

El árbol genérico que produce xmltodict (dict/list/str) se convierte a
estos modelos al despachar a cada parser. Reglas de coerción:
- Los campos str aceptan texto, CDATA ({"__cdata": ...}) o elementos con
  atributos ({"#text": ...}); un elemento vacío se lee como "".
- Los campos lista aceptan un único elemento o una lista (ensure_array).
- Un contenedor vacío (<impuestos/>) se lee como contenedor sin hijos; si
  el contenedor falta por completo, la validación falla.
"""
import typing
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from sri_ats.modules.sri_parser.normalizers import ensure_array, text_value


class SRIXmlModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_xml_node(cls, value: Any, info: ValidationInfo) -> Any:
        annotation = cls.model_fields[info.field_name].annotation
        if annotation is str:
            return text_value(value)
        if typing.get_origin(annotation) is list:
            return ensure_array(value)
        if isinstance(annotation, type) and issubclass(annotation, BaseModel) and value in (None, ""):
            return {}
        return value


# =====================================================
# InfoTributaria (común a todos los comprobantes)
# =====================================================

class InfoTributaria(SRIXmlModel):
    ambiente: str = ""
    tipo_emision: str = ""
    razon_social: str = ""
    nombre_comercial: str = ""
    ruc: str = ""
    clave_acceso: str = ""
    cod_doc: str = ""
    estab: str = ""
    pto_emi: str = ""
    secuencial: str = ""
    dir_matriz: str = ""


class TotalImpuesto(SRIXmlModel):
    """Entrada de impuesto (totalImpuesto o impuesto de detalle)."""
    codigo: str = ""
    codigo_porcentaje: str = ""
    base_imponible: str = ""
    valor: str = ""
    tarifa: str = ""


class TotalConImpuestos(SRIXmlModel):
    total_impuesto: List[TotalImpuesto] = Field(default_factory=list)


class Pago(SRIXmlModel):
    forma_pago: str = ""
    total: str = ""
    plazo: str = ""
    unidad_tiempo: str = ""


class Pagos(SRIXmlModel):
    pago: List[Pago] = Field(default_factory=list)


# =====================================================
# FACTURA
# =====================================================

class InfoFactura(SRIXmlModel):
    fecha_emision: str = ""
    dir_establecimiento: str = ""
    contribuyente_especial: str = ""
    obligado_contabilidad: str = ""
    tipo_identificacion_comprador: str = ""
    razon_social_comprador: str = ""
    identificacion_comprador: str = ""
    direccion_comprador: str = ""
    total_sin_impuestos: str = ""
    total_descuento: str = ""
    total_con_impuestos: TotalConImpuestos
    propina: str = ""
    importe_total: str = ""
    moneda: str = ""
    pagos: Pagos = Field(default_factory=Pagos)


class FacturaXML(SRIXmlModel):
    info_tributaria: InfoTributaria
    info_factura: InfoFactura


# =====================================================
# RETENCIÓN
# =====================================================

class InfoCompRetencion(SRIXmlModel):
    fecha_emision: str = ""
    dir_establecimiento: str = ""
    contribuyente_especial: str = ""
    obligado_contabilidad: str = ""
    tipo_identificacion_sujeto_retenido: str = ""
    razon_social_sujeto_retenido: str = ""
    identificacion_sujeto_retenido: str = ""
    periodo_fiscal: str = ""


class ImpuestoRetencion(SRIXmlModel):
    codigo: str = ""
    codigo_retencion: str = ""
    base_imponible: str = ""
    porcentaje_retener: str = ""
    valor_retenido: str = ""
    cod_doc_sustento: str = ""
    num_doc_sustento: str = ""
    fecha_emision_doc_sustento: str = ""


class ImpuestosRetencion(SRIXmlModel):
    impuesto: List[ImpuestoRetencion] = Field(default_factory=list)


class RetencionesSustento(SRIXmlModel):
    retencion: List[ImpuestoRetencion] = Field(default_factory=list)


class DocSustento(SRIXmlModel):
    cod_sustento: str = ""
    cod_doc_sustento: str = ""
    num_doc_sustento: str = ""
    fecha_emision_doc_sustento: str = ""
    retenciones: RetencionesSustento = Field(default_factory=RetencionesSustento)


class DocsSustento(SRIXmlModel):
    doc_sustento: List[DocSustento] = Field(default_factory=list)


class RetencionXML(SRIXmlModel):
    info_tributaria: InfoTributaria
    info_comp_retencion: InfoCompRetencion
    # v1.0.0: impuestos/impuesto; v2.0.0: docsSustento/docSustento/retenciones/retencion
    impuestos: ImpuestosRetencion = Field(default_factory=ImpuestosRetencion)
    docs_sustento: DocsSustento = Field(default_factory=DocsSustento)

    def lineas_retencion(self) -> List[ImpuestoRetencion]:
        lineas = list(self.impuestos.impuesto)
        for doc in self.docs_sustento.doc_sustento:
            lineas.extend(doc.retenciones.retencion)
        return lineas


# =====================================================
# NOTA DE CRÉDITO
# =====================================================

class InfoNotaCredito(SRIXmlModel):
    fecha_emision: str = ""
    dir_establecimiento: str = ""
    tipo_identificacion_comprador: str = ""
    razon_social_comprador: str = ""
    identificacion_comprador: str = ""
    contribuyente_especial: str = ""
    obligado_contabilidad: str = ""
    cod_doc_modificado: str = ""
    num_doc_modificado: str = ""
    fecha_emision_doc_sustento: str = ""
    total_sin_impuestos: str = ""
    valor_modificacion: str = ""
    moneda: str = ""
    total_con_impuestos: TotalConImpuestos
    motivo: str = ""


class NotaCreditoXML(SRIXmlModel):
    info_tributaria: InfoTributaria
    info_nota_credito: InfoNotaCredito


# =====================================================
# NOTA DE DÉBITO
# =====================================================

class ImpuestosNotaDebito(SRIXmlModel):
    impuesto: List[TotalImpuesto] = Field(default_factory=list)


class InfoNotaDebito(SRIXmlModel):
    fecha_emision: str = ""
    dir_establecimiento: str = ""
    tipo_identificacion_comprador: str = ""
    razon_social_comprador: str = ""
    identificacion_comprador: str = ""
    contribuyente_especial: str = ""
    obligado_contabilidad: str = ""
    cod_doc_modificado: str = ""
    num_doc_modificado: str = ""
    fecha_emision_doc_sustento: str = ""
    total_sin_impuestos: str = ""
    # Esquema v1.0.0 usa impuestos/impuesto; v1.1.0 usa totalConImpuestos/totalImpuesto
    impuestos: ImpuestosNotaDebito = Field(default_factory=ImpuestosNotaDebito)
    total_con_impuestos: TotalConImpuestos = Field(default_factory=TotalConImpuestos)
    valor_total: str = ""
    pagos: Pagos = Field(default_factory=Pagos)


class NotaDebitoXML(SRIXmlModel):
    info_tributaria: InfoTributaria
    info_nota_debito: InfoNotaDebito


# =====================================================
# GUÍA DE REMISIÓN
# =====================================================

class InfoGuiaRemision(SRIXmlModel):
    dir_establecimiento: str = ""
    dir_partida: str = ""
    razon_social_transportista: str = ""
    tipo_identificacion_transportista: str = ""
    ruc_transportista: str = ""
    obligado_contabilidad: str = ""
    contribuyente_especial: str = ""
    fecha_ini_transporte: str = ""
    fecha_fin_transporte: str = ""
    placa: str = ""


class Destinatario(SRIXmlModel):
    identificacion_destinatario: str = ""
    razon_social_destinatario: str = ""
    dir_destinatario: str = ""
    motivo_traslado: str = ""
    cod_doc_sustento: str = ""
    num_doc_sustento: str = ""
    num_aut_doc_sustento: str = ""
    fecha_emision_doc_sustento: str = ""


class Destinatarios(SRIXmlModel):
    destinatario: List[Destinatario] = Field(default_factory=list)


class GuiaRemisionXML(SRIXmlModel):
    info_tributaria: InfoTributaria
    info_guia_remision: InfoGuiaRemision
    destinatarios: Destinatarios
