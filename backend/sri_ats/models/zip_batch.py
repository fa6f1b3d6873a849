"""
Modelos del procesamiento de un ZIP con comprobantes XML.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import Field

from sri_ats.models.sri_document import CamelModel, ParserResult


@dataclass
class ExtractedFile:
    filename: str
    content: str
    size: int


class ZipError(CamelModel):
    code: str
    message: str
    filename: Optional[str] = None


@dataclass
class ZipExtraction:
    """XML extraídos del ZIP; los archivos que no pudieron decodificarse van en errors."""
    files: List[ExtractedFile] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    errors: List[ZipError] = field(default_factory=list)


class FileProcessResult(CamelModel):
    filename: str
    result: ParserResult


class BatchProcessResult(CamelModel):
    total_files: int = 0
    xml_files: int = 0
    processed: int = 0
    failed: int = 0
    skipped: List[str] = Field(default_factory=list)
    results: List[FileProcessResult] = Field(default_factory=list)
    errors: List[ZipError] = Field(default_factory=list)
