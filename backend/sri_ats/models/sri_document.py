"""
Modelo normalizado de comprobantes electrónicos SRI.

Todos los montos se expresan en centavos (int). Los nombres de campo son
snake_case en Python y camelCase en JSON (alias), igual que los payloads
que consume la API de generación ATS.
"""
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorizationInfo(CamelModel):
    """Datos de autorización del sobre SRI (o valores por defecto)."""
    numero_autorizacion: str = ""
    fecha_autorizacion: str = ""
    ambiente: str = "2"


class Emisor(CamelModel):
    ruc: str
    razon_social: str = ""
    nombre_comercial: Optional[str] = None


class Receptor(CamelModel):
    tipo_identificacion: str = ""
    identificacion: str = ""
    razon_social: str = ""


class Valores(CamelModel):
    subtotal: int = 0
    iva0: int = 0
    iva12: int = 0
    iva15: int = 0
    iva: int = 0
    ice: int = 0
    irbpnr: int = 0
    propina: int = 0
    total: int = 0


class Retenciones(CamelModel):
    iva: int = 0
    renta: int = 0


class NormalizedDocument(CamelModel):
    tipo: str
    clave_acceso: str
    numero_autorizacion: str = ""
    fecha_autorizacion: str = ""
    ambiente: str = "2"
    emisor: Emisor
    receptor: Receptor = Field(default_factory=Receptor)
    fecha: str = ""
    valores: Valores = Field(default_factory=Valores)
    retenciones: Optional[Retenciones] = None
    forma_pago: Optional[str] = None
    xml_hash: str = ""


class ValidationIssue(CamelModel):
    code: str
    message: str
    field: Optional[str] = None
    line: Optional[int] = None
    col: Optional[int] = None


class ParserResult(CamelModel):
    success: bool
    document: Optional[NormalizedDocument] = None
    errors: Optional[List[ValidationIssue]] = None
    warnings: Optional[List[ValidationIssue]] = None


@dataclass
class ParserOptions:
    """Opciones de parse_xml.

    validate: verificar sintaxis XML antes de parsear.
    include_warnings: incluir advertencias en el resultado.
    strict: convertir advertencias en errores.
    """
    validate: bool = True
    include_warnings: bool = True
    strict: bool = False
