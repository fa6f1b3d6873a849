from sri_ats.models.sri_xml import InfoTributaria, TotalConImpuestos, TotalImpuesto
from sri_ats.modules.sri_parser.clave_acceso import is_valid_clave_acceso, parse_clave_acceso
from sri_ats.modules.sri_parser.normalizers import (
    ensure_array,
    format_currency,
    format_money,
    normalize_ambiente,
    parse_money_to_cents,
    parse_percentage,
    text_value,
)
from sri_ats.modules.sri_parser.tax_utils import extract_tax_totals
from sri_ats.utils.date_utils import (
    format_to_sri_date,
    parse_sri_date,
    parse_sri_datetime,
    parse_sri_period,
)

from sri_samples import EMISOR_RUC, make_clave


def test_parse_money_to_cents_basic_amounts():
    assert parse_money_to_cents("123.45") == 12345
    assert parse_money_to_cents("100") == 10000
    assert parse_money_to_cents("0.10") == 10
    assert parse_money_to_cents(12.5) == 1250
    assert parse_money_to_cents(7) == 700


def test_parse_money_to_cents_rounds_half_away_from_zero():
    assert parse_money_to_cents("0.005") == 1
    assert parse_money_to_cents("1.005") == 101
    assert parse_money_to_cents("-1.005") == -101
    assert parse_money_to_cents("2.344") == 234


def test_parse_money_to_cents_invalid_values_are_zero():
    for value in (None, "", "abc", "NaN", "1e20"):
        assert parse_money_to_cents(value) == 0, f"{value!r} debería convertirse a 0"


def test_parse_money_to_cents_uses_numeric_prefix():
    assert parse_money_to_cents("12.50abc") == 1250
    assert parse_money_to_cents("  3.20 ") == 320


def test_format_money_and_currency():
    assert format_money(12345) == "123.45"
    assert format_money(0) == "0.00"
    assert format_money(-5) == "-0.05"
    assert format_currency(123456789) == "$1.234.567,89"


def test_ensure_array_and_text_value():
    assert ensure_array(None) == []
    assert ensure_array("") == []
    assert ensure_array({"a": 1}) == [{"a": 1}]
    assert ensure_array([1, 2]) == [1, 2]

    assert text_value({"__cdata": "Comercial & Cía"}) == "Comercial & Cía"
    assert text_value({"@_id": "x", "#text": "valor"}) == "valor"
    assert text_value({"#text": "Comercial ", "__cdata": "& Hijos"}) == "Comercial & Hijos"
    assert text_value(None) == ""


def test_normalize_ambiente_and_percentage():
    assert normalize_ambiente("PRODUCCIÓN") == "2"
    assert normalize_ambiente("PRUEBAS") == "1"
    assert normalize_ambiente("2") == "2"
    assert parse_percentage("15%") == 15.0
    assert parse_percentage("") == 0.0


def test_sri_xml_models_coerce_generic_tree():
    info = InfoTributaria.model_validate({
        "ruc": {"@_tipo": "x", "#text": EMISOR_RUC},
        "razonSocial": {"__cdata": "Andina & Cía"},
        "codDoc": None,
    })
    assert info.ruc == EMISOR_RUC
    assert info.razon_social == "Andina & Cía"
    assert info.cod_doc == ""

    single = TotalConImpuestos.model_validate({"totalImpuesto": {"codigo": "2", "valor": "1.00"}})
    assert len(single.total_impuesto) == 1

    empty = TotalConImpuestos.model_validate({"totalImpuesto": None})
    assert empty.total_impuesto == []


def test_extract_tax_totals_groups_iva_bases():
    entries = [
        TotalImpuesto(codigo="2", codigo_porcentaje="0", base_imponible="10.00", valor="0.00"),
        TotalImpuesto(codigo="2", codigo_porcentaje="2", base_imponible="100.00", valor="12.00"),
        TotalImpuesto(codigo="2", codigo_porcentaje="4", base_imponible="200.00", valor="30.00"),
        TotalImpuesto(codigo="2", codigo_porcentaje="3", base_imponible="50.00", valor="7.00"),
        TotalImpuesto(codigo="3", codigo_porcentaje="3051", base_imponible="100.00", valor="15.00"),
        TotalImpuesto(codigo="5", codigo_porcentaje="5001", base_imponible="0.00", valor="0.02"),
    ]

    totals = extract_tax_totals(entries)

    assert totals.iva0 == 1000
    assert totals.iva12 == 10000
    assert totals.iva15 == 25000
    assert totals.iva_total == 4900
    assert totals.ice_total == 1500
    assert totals.irbpnr_total == 2


def test_extract_tax_totals_unknown_iva_rate_only_adds_value():
    totals = extract_tax_totals([
        TotalImpuesto(codigo="2", codigo_porcentaje="9", base_imponible="80.00", valor="4.00"),
    ])

    assert totals.iva0 == totals.iva12 == totals.iva15 == 0
    assert totals.iva_total == 400


def test_parse_clave_acceso_slices_positions():
    clave = make_clave(cod_doc="07", estab="003", pto_emi="004", secuencial="000000789")
    parts = parse_clave_acceso(clave)

    assert parts.fecha_emision == "15012024"
    assert parts.tipo_comprobante == "07"
    assert parts.ruc_emisor == EMISOR_RUC
    assert parts.ambiente == "2"
    assert parts.establecimiento == "003"
    assert parts.punto_emision == "004"
    assert parts.secuencial == "000000789"
    assert parts.codigo_numerico == "12345678"
    assert parts.tipo_emision == "1"
    assert parts.digito_verificador == "7"
    assert parts.to_clave() == clave


def test_parse_clave_acceso_rejects_wrong_length():
    assert parse_clave_acceso("123") is None
    assert parse_clave_acceso(None) is None
    assert is_valid_clave_acceso(make_clave())
    assert not is_valid_clave_acceso("A" * 49)


def test_sri_date_conversions():
    assert parse_sri_date("15/01/2024") == "2024-01-15"
    assert parse_sri_date("2024-01-15") == "2024-01-15"
    assert parse_sri_date("") == ""
    assert parse_sri_datetime("15/01/2024 10:30:00") == "2024-01-15T10:30:00"
    assert parse_sri_datetime("2024-01-15T10:30:00-05:00") == "2024-01-15T10:30:00-05:00"
    assert parse_sri_period("01/2024") == "2024-01"
    assert format_to_sri_date("2024-01-15") == "15/01/2024"
