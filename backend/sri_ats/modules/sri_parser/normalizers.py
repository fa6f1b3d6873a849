"""
Normalizadores de valores SRI: montos, listas, cadenas e identificaciones.

parse_money_to_cents es el único punto donde un decimal se convierte a
entero; aguas abajo todo se suma como int.
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List, Optional, Union

from sri_ats.config.sri_codes import SRIAmbiente

# Prefijo numérico al estilo parseFloat: "12.50abc" -> 12.50
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_RUC = re.compile(r"[0-9]{13}")

# Montos con más de 15 dígitos enteros se consideran inválidos
_MAX_MONEY_EXPONENT = 15

_AMBIENTE_LABELS = {
    "PRODUCCION": SRIAmbiente.PRODUCCION,
    "PRODUCCIÓN": SRIAmbiente.PRODUCCION,
    "PRUEBAS": SRIAmbiente.PRUEBAS,
}


def parse_money_to_cents(value: Union[str, int, float, Decimal, None]) -> int:
    """
    Convierte un monto decimal a centavos.

    "123.45" -> 12345, "100" -> 10000, None/""/NaN -> 0.
    Redondeo ROUND_HALF_UP: "0.005" -> 1.
    """
    if value is None or value == "" or isinstance(value, bool):
        return 0

    try:
        if isinstance(value, (int, float, Decimal)):
            number = Decimal(str(value))
        else:
            match = _NUMERIC_PREFIX.match(str(value))
            if not match:
                return 0
            number = Decimal(match.group(1))
    except InvalidOperation:
        return 0

    if not number.is_finite() or number.adjusted() > _MAX_MONEY_EXPONENT:
        return 0

    return int((number * 100).to_integral_value(rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> float:
    """12345 -> 123.45 (solo para presentación)."""
    return cents / 100


def format_money(cents: int) -> str:
    """12345 -> "123.45" sin pasar por float."""
    return f"{Decimal(cents).scaleb(-2):.2f}"


def format_currency(cents: int) -> str:
    """12345 -> "$123.45"; formato de visualización es-EC."""
    dollars = Decimal(cents).scaleb(-2)
    sign = "-" if dollars < 0 else ""
    integer, _, decimals = f"{abs(dollars):.2f}".partition(".")
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}${grouped},{decimals}"


def ensure_array(value: Any) -> List[Any]:
    """El XML SRI puede traer un único hijo o varios; siempre devuelve lista."""
    if value is None or value == "":
        return []
    return value if isinstance(value, list) else [value]


def text_value(node: Any) -> str:
    """
    Texto de un nodo del árbol genérico.

    Acepta str, CDATA ({"__cdata": ...}), elementos con atributos
    ({"#text": ...}) y listas de fragmentos.
    """
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        return text_value(node.get("#text")) + text_value(node.get("__cdata"))
    if isinstance(node, list):
        return "".join(text_value(item) for item in node)
    return str(node)


def normalize_string(value: Any) -> str:
    return text_value(value).strip()


def normalize_ambiente(value: str) -> str:
    """El sobre de autorización trae "PRODUCCIÓN"/"PRUEBAS"; el comprobante usa "2"/"1"."""
    cleaned = normalize_string(value)
    return _AMBIENTE_LABELS.get(cleaned.upper(), cleaned)


def is_valid_ruc_format(ruc: str) -> bool:
    return bool(ruc) and bool(_RUC.fullmatch(ruc))


def parse_percentage(value: Optional[str]) -> float:
    """ "12.00" -> 12.0, "15%" -> 15.0 """
    if not value:
        return 0.0
    match = _NUMERIC_PREFIX.match(value.replace("%", "").strip())
    return float(match.group(1)) if match else 0.0


def format_document_number(estab: str, pto_emi: str, secuencial: str) -> str:
    return f"{estab}-{pto_emi}-{secuencial}"
