"""Códigos de error del procesamiento de ZIP."""


class ZipErrorCodes:
    INVALID_ZIP = "INVALID_ZIP"
    EMPTY_ZIP = "EMPTY_ZIP"
    NO_XML_FILES = "NO_XML_FILES"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
