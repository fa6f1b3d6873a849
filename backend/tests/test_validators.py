from sri_ats.modules.sri_parser.errors import ParserErrorCodes
from sri_ats.modules.sri_parser.validators import (
    compute_xml_hash,
    validate_clave_acceso,
    validate_document_date,
    validate_monetary_value,
    validate_numero_autorizacion,
    validate_ruc,
    validate_xml,
)

from sri_samples import make_clave


def _codes(validation):
    return [error.code for error in validation.errors]


def test_validate_xml():
    assert validate_xml("<factura><a>1</a></factura>").is_valid
    assert _codes(validate_xml("")) == [ParserErrorCodes.EMPTY_XML]
    assert _codes(validate_xml("<factura>")) == [ParserErrorCodes.XML_SYNTAX_ERROR]


def test_compute_xml_hash_es_sha256_hex():
    digest = compute_xml_hash("<a/>")

    assert len(digest) == 64
    assert digest == compute_xml_hash("<a/>")
    assert digest != compute_xml_hash("<b/>")


def test_validate_clave_acceso():
    assert validate_clave_acceso(make_clave()).is_valid
    assert _codes(validate_clave_acceso("")) == [ParserErrorCodes.MISSING_CLAVE]
    assert _codes(validate_clave_acceso("12345")) == [ParserErrorCodes.INVALID_CLAVE_FORMAT]


def test_validate_numero_autorizacion_acepta_37_o_49_digitos():
    assert validate_numero_autorizacion("1" * 37).is_valid
    assert validate_numero_autorizacion(make_clave()).is_valid
    assert _codes(validate_numero_autorizacion("1" * 40)) == [ParserErrorCodes.INVALID_AUTORIZACION_FORMAT]
    assert _codes(validate_numero_autorizacion("")) == [ParserErrorCodes.MISSING_AUTORIZACION]


def test_validate_ruc():
    assert validate_ruc("1790000000001").is_valid
    assert validate_ruc("3090000000001").is_valid
    assert _codes(validate_ruc("")) == [ParserErrorCodes.MISSING_RUC]
    assert _codes(validate_ruc("179000")) == [ParserErrorCodes.INVALID_RUC_FORMAT]
    assert _codes(validate_ruc("9990000000001")) == [ParserErrorCodes.INVALID_PROVINCE_CODE]
    assert _codes(validate_ruc("1790000000002")) == [ParserErrorCodes.INVALID_RUC_SUFFIX]
    assert _codes(validate_ruc("2590000000009")) == [
        ParserErrorCodes.INVALID_PROVINCE_CODE,
        ParserErrorCodes.INVALID_RUC_SUFFIX,
    ]


def test_validate_document_date():
    assert validate_document_date("2024-01-15").is_valid
    assert _codes(validate_document_date("2999-01-01")) == [ParserErrorCodes.FUTURE_DATE]
    assert _codes(validate_document_date("")) == [ParserErrorCodes.MISSING_DATE]


def test_validate_monetary_value():
    assert validate_monetary_value(0, "total").is_valid
    assert validate_monetary_value(11200, "total").is_valid
    assert _codes(validate_monetary_value(-1, "total")) == [ParserErrorCodes.NEGATIVE_VALUE]
    assert _codes(validate_monetary_value(1.5, "total")) == [ParserErrorCodes.INVALID_MONETARY_VALUE]
    assert _codes(validate_monetary_value(True, "total")) == [ParserErrorCodes.INVALID_MONETARY_VALUE]
