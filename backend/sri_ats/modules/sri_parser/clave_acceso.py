"""
Clave de acceso SRI (49 dígitos).

Posiciones (base 0, rango semiabierto):
    [0,8)   fecha de emisión DDMMYYYY
    [8,10)  tipo de comprobante
    [10,23) RUC del emisor
    [23,24) ambiente
    [24,27) establecimiento
    [27,30) punto de emisión
    [30,39) secuencial
    [39,47) código numérico
    [47,48) tipo de emisión
    [48,49) dígito verificador
"""
import re
from dataclasses import dataclass, astuple
from typing import Optional

CLAVE_ACCESO_LENGTH = 49

_CLAVE_ACCESO = re.compile(r"[0-9]{49}")


@dataclass(frozen=True)
class ClaveAccesoParts:
    fecha_emision: str
    tipo_comprobante: str
    ruc_emisor: str
    ambiente: str
    establecimiento: str
    punto_emision: str
    secuencial: str
    codigo_numerico: str
    tipo_emision: str
    digito_verificador: str

    def to_clave(self) -> str:
        return "".join(astuple(self))


def parse_clave_acceso(clave: Optional[str]) -> Optional[ClaveAccesoParts]:
    """Descompone la clave; None si no tiene 49 caracteres. No valida dígitos."""
    if not clave or len(clave) != CLAVE_ACCESO_LENGTH:
        return None

    return ClaveAccesoParts(
        fecha_emision=clave[0:8],
        tipo_comprobante=clave[8:10],
        ruc_emisor=clave[10:23],
        ambiente=clave[23:24],
        establecimiento=clave[24:27],
        punto_emision=clave[27:30],
        secuencial=clave[30:39],
        codigo_numerico=clave[39:47],
        tipo_emision=clave[47:48],
        digito_verificador=clave[48:49],
    )


def is_valid_clave_acceso(clave: Optional[str]) -> bool:
    return bool(clave) and bool(_CLAVE_ACCESO.fullmatch(clave))
