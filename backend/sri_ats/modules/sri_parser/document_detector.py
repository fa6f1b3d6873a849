"""
Detección del tipo de comprobante a partir del árbol genérico.

El orden de ROOT_ELEMENTS define la precedencia cuando un árbol trae más de
una raíz conocida: factura > comprobanteRetencion > notaCredito >
notaDebito > guiaRemision.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sri_ats.config.sri_codes import DocumentTypes, SRI_CODE_TO_DOCUMENT_TYPE
from sri_ats.modules.sri_parser.normalizers import text_value, normalize_string
from sri_ats.modules.sri_parser.xml_tree import root_keys

ROOT_ELEMENTS = (
    ("factura", DocumentTypes.FACTURA),
    ("comprobanteRetencion", DocumentTypes.RETENCION),
    ("notaCredito", DocumentTypes.NOTA_CREDITO),
    ("notaDebito", DocumentTypes.NOTA_DEBITO),
    ("guiaRemision", DocumentTypes.GUIA_REMISION),
)

ROOT_ELEMENT_BY_TYPE: Dict[str, str] = {tipo: key for key, tipo in ROOT_ELEMENTS}


@dataclass
class DetectionResult:
    detected: bool
    tipo: Optional[str] = None
    error: Optional[str] = None


@dataclass
class EnvelopeContent:
    """Contenido del sobre <autorizacion> del SRI."""
    xml: str
    numero_autorizacion: str
    fecha_autorizacion: str
    estado: str
    ambiente: str


def is_autorizacion_envelope(tree: Any) -> bool:
    if not isinstance(tree, dict):
        return False
    autorizacion = tree.get("autorizacion")
    return isinstance(autorizacion, dict) and "comprobante" in autorizacion


def extract_comprobante(tree: Dict[str, Any]) -> EnvelopeContent:
    """El SRI envía el comprobante como texto (normalmente CDATA) dentro de autorizacion.comprobante."""
    auth = tree["autorizacion"]
    return EnvelopeContent(
        xml=text_value(auth.get("comprobante")),
        numero_autorizacion=normalize_string(auth.get("numeroAutorizacion")),
        fecha_autorizacion=normalize_string(auth.get("fechaAutorizacion")),
        estado=normalize_string(auth.get("estado")),
        ambiente=normalize_string(auth.get("ambiente")),
    )


def detect_document_type(tree: Any) -> DetectionResult:
    if not isinstance(tree, dict) or not tree:
        return DetectionResult(detected=False, error="XML parseado está vacío o no es un objeto")

    for key, tipo in ROOT_ELEMENTS:
        if key in tree:
            return DetectionResult(detected=True, tipo=tipo)

    keys = ", ".join(root_keys(tree))
    return DetectionResult(
        detected=False,
        error=f"Tipo de documento no reconocido. Elementos raíz: {keys}",
    )


def get_document_type_from_cod_doc(cod_doc: str) -> Optional[str]:
    """codDoc de infoTributaria -> tipo interno (03 liquidación se trata como factura)."""
    return SRI_CODE_TO_DOCUMENT_TYPE.get(cod_doc)


def has_document_structure(tree: Any, tipo: str) -> bool:
    """La raíz del tipo detectado debe ser un elemento con hijos."""
    key = ROOT_ELEMENT_BY_TYPE.get(tipo)
    return key is not None and isinstance(tree, dict) and isinstance(tree.get(key), dict)
