"""
Esquemas de request de la API.

Los documentos de /api/ats/generate se validan con reglas más estrictas
que el modelo normalizado (RUC de 13 dígitos, clave de 49, fecha real,
montos enteros), porque vienen del cliente y no del parser.
"""
from datetime import date
from typing import Annotated, List, Literal, Optional

from pydantic import ConfigDict, Field, StrictInt, field_validator

from sri_ats.config.settings import settings
from sri_ats.config.sri_codes import (
    AMBIENTE_VALUES, DOCUMENT_TYPE_VALUES, FORMA_PAGO_VALUES, TIPO_IDENTIFICACION_VALUES
)
from sri_ats.models.ats import ATSGeneratorOptions
from sri_ats.modules.ats.constants import PERIODO_REGEX, RUC_PATTERN, RUC_REGEX
from sri_ats.models.sri_document import (
    CamelModel, Emisor, NormalizedDocument, Receptor, Retenciones, Valores
)

DocumentType = Literal[DOCUMENT_TYPE_VALUES]
Ambiente = Literal[AMBIENTE_VALUES]
TipoIdentificacion = Literal[TIPO_IDENTIFICACION_VALUES]
FormaPago = Literal[FORMA_PAGO_VALUES]

Cents = StrictInt
NonEmpty = Annotated[str, Field(min_length=1)]


class EmisorPayload(Emisor):
    ruc: Annotated[str, Field(pattern=RUC_PATTERN)]
    razon_social: NonEmpty


class ReceptorPayload(Receptor):
    tipo_identificacion: TipoIdentificacion
    identificacion: NonEmpty
    razon_social: NonEmpty


class ValoresPayload(Valores):
    subtotal: Cents
    iva0: Cents
    iva12: Cents
    iva15: Cents
    iva: Cents
    ice: Cents
    irbpnr: Cents
    propina: Cents
    total: Cents


class RetencionesPayload(Retenciones):
    iva: Cents
    renta: Cents


class DocumentPayload(NormalizedDocument):
    tipo: DocumentType
    clave_acceso: Annotated[str, Field(pattern=r"^[0-9]{49}$")]
    numero_autorizacion: NonEmpty
    fecha_autorizacion: NonEmpty
    ambiente: Ambiente
    emisor: EmisorPayload
    receptor: ReceptorPayload
    fecha: Annotated[str, Field(pattern=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")]
    valores: ValoresPayload
    retenciones: Optional[RetencionesPayload] = None
    forma_pago: Optional[FormaPago] = None
    xml_hash: Annotated[str, Field(pattern=r"^[a-fA-F0-9]{64}$")]

    @field_validator("fecha")
    @classmethod
    def validate_fecha_existe(cls, value: str) -> str:
        try:
            date.fromisoformat(value)
        except ValueError:
            raise ValueError("Fecha inválida (fecha no existe)")
        return value


class GenerateATSOptions(CamelModel):
    model_config = ConfigDict(extra="forbid")

    formato: Optional[Literal["xlsx", "csv"]] = None
    periodo: Optional[str] = None
    contribuyente_ruc: Optional[str] = None
    csv_section: Optional[Literal["compras", "ventas"]] = None

    @field_validator("periodo")
    @classmethod
    def validate_periodo(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not PERIODO_REGEX.fullmatch(value):
            raise ValueError("Período inválido. Debe estar en formato YYYY-MM")
        return value

    @field_validator("contribuyente_ruc")
    @classmethod
    def validate_contribuyente_ruc(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not RUC_REGEX.fullmatch(value):
            raise ValueError("RUC inválido. Debe tener 13 dígitos")
        return value

    def generator_options(self) -> ATSGeneratorOptions:
        return ATSGeneratorOptions(periodo=self.periodo, contribuyente_ruc=self.contribuyente_ruc)


class GenerateATSRequest(CamelModel):
    model_config = ConfigDict(extra="forbid")

    documents: Annotated[
        List[DocumentPayload],
        Field(min_length=1, max_length=settings.MAX_DOCUMENTS_PER_REQUEST),
    ]
    options: GenerateATSOptions = Field(default_factory=GenerateATSOptions)
