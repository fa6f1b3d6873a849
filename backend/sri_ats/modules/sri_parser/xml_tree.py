"""
Árbol genérico de un XML SRI (xmltodict).

Convenciones del árbol:
- Atributos con prefijo "@_" (p. ej. "@_id", "@_version").
- Un elemento cuyo único contenido es una sección CDATA queda como
  {"__cdata": texto}, distinguible del texto normal. Una sección CDATA
  mezclada con texto se integra a ese texto en el orden del documento.
- Prefijos de namespace eliminados y atributos xmlns descartados.
- Valores de texto como str recortados (sin conversión numérica).
"""
import re
from typing import Any, Dict, Optional, Tuple
from xml.sax.saxutils import escape

import xmltodict

ATTR_PREFIX = "@_"
CDATA_KEY = "__cdata"

_CDATA_BODY = r"<!\[CDATA\[((?:(?!\]\]>).)*)\]\]>"
# CDATA entre la etiqueta de apertura y la de cierre, sin texto alrededor
_SOLE_CDATA = re.compile(r"(?<=>)(?<!\]\]>)\s*" + _CDATA_BODY + r"\s*(?=</)", re.DOTALL)
_CDATA_SECTION = re.compile(_CDATA_BODY, re.DOTALL)


def _wrap_cdata(match: "re.Match[str]") -> str:
    # expat no reporta CDATA por separado; se marca con un elemento propio
    return f"<{CDATA_KEY}>{escape(match.group(1))}</{CDATA_KEY}>"


def _inline_cdata(match: "re.Match[str]") -> str:
    return escape(match.group(1))


def _local_name(name: str) -> str:
    return name.rsplit(":", 1)[-1]


def _strip_namespaces(path, key: str, value: Any) -> Optional[Tuple[str, Any]]:
    if key.startswith(ATTR_PREFIX):
        attr = key[len(ATTR_PREFIX):]
        if attr == "xmlns" or attr.startswith("xmlns:"):
            return None
        return ATTR_PREFIX + _local_name(attr), value
    return _local_name(key), value


def parse_xml_tree(xml: str) -> Dict[str, Any]:
    """
    Convierte un XML en un dict genérico.

    Lanza ExpatError (o ValueError/TypeError para entradas no textuales)
    si el XML no puede parsearse; el orquestador traduce la excepción a un
    código de error.
    """
    prepared = _CDATA_SECTION.sub(_inline_cdata, _SOLE_CDATA.sub(_wrap_cdata, xml))
    return xmltodict.parse(
        prepared,
        attr_prefix=ATTR_PREFIX,
        cdata_key="#text",
        dict_constructor=dict,
        postprocessor=_strip_namespaces,
    )


def root_keys(tree: Any) -> list:
    """Claves de nivel superior, sin instrucciones de procesamiento."""
    if not isinstance(tree, dict):
        return []
    return [key for key in tree.keys() if not key.startswith("?")]
