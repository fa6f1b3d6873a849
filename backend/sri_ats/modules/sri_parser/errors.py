"""Códigos de error estables del parser de comprobantes SRI."""


class ParserErrorCodes:
    # Sintaxis / estructura
    EMPTY_XML = "EMPTY_XML"
    XML_SYNTAX_ERROR = "XML_SYNTAX_ERROR"
    XML_PARSE_ERROR = "XML_PARSE_ERROR"
    COMPROBANTE_PARSE_ERROR = "COMPROBANTE_PARSE_ERROR"

    # Autorización
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # Tipo de documento
    UNKNOWN_DOCUMENT_TYPE = "UNKNOWN_DOCUMENT_TYPE"
    UNSUPPORTED_DOCUMENT_TYPE = "UNSUPPORTED_DOCUMENT_TYPE"
    INVALID_FACTURA_STRUCTURE = "INVALID_FACTURA_STRUCTURE"
    INVALID_RETENCION_STRUCTURE = "INVALID_RETENCION_STRUCTURE"
    INVALID_NOTA_CREDITO_STRUCTURE = "INVALID_NOTA_CREDITO_STRUCTURE"
    INVALID_NOTA_DEBITO_STRUCTURE = "INVALID_NOTA_DEBITO_STRUCTURE"
    INVALID_GUIA_REMISION_STRUCTURE = "INVALID_GUIA_REMISION_STRUCTURE"

    # Campos obligatorios del comprobante
    MISSING_CLAVE_ACCESO = "MISSING_CLAVE_ACCESO"
    MISSING_EMISOR_RUC = "MISSING_EMISOR_RUC"

    # Advertencias
    MISSING_DOC_MODIFICADO = "MISSING_DOC_MODIFICADO"
    NO_RETENTIONS = "NO_RETENTIONS"
    NO_DESTINATARIOS = "NO_DESTINATARIOS"
    MISSING_PLACA = "MISSING_PLACA"

    # Excepción interna de un parser
    PARSE_ERROR = "PARSE_ERROR"

    # Validadores de campo
    MISSING_CLAVE = "MISSING_CLAVE"
    INVALID_CLAVE_FORMAT = "INVALID_CLAVE_FORMAT"
    MISSING_AUTORIZACION = "MISSING_AUTORIZACION"
    INVALID_AUTORIZACION_FORMAT = "INVALID_AUTORIZACION_FORMAT"
    MISSING_RUC = "MISSING_RUC"
    INVALID_RUC_FORMAT = "INVALID_RUC_FORMAT"
    INVALID_PROVINCE_CODE = "INVALID_PROVINCE_CODE"
    INVALID_RUC_SUFFIX = "INVALID_RUC_SUFFIX"
    MISSING_DATE = "MISSING_DATE"
    FUTURE_DATE = "FUTURE_DATE"
    INVALID_MONETARY_VALUE = "INVALID_MONETARY_VALUE"
    NEGATIVE_VALUE = "NEGATIVE_VALUE"


def invalid_structure_code(tipo: str) -> str:
    """factura -> INVALID_FACTURA_STRUCTURE"""
    return f"INVALID_{tipo.upper()}_STRUCTURE"
