"""
Patrón Result para manejo estandarizado de resultados y errores.

Uso:
    from sri_ats.core.result import success, failure, Result

    def extract(data: bytes) -> Result[ZipExtraction]:
        if not data:
            return failure("El archivo ZIP está vacío", code=ZipErrorCodes.EMPTY_ZIP)
        return success(ZipExtraction(...))

    result = extract(data)
    if result.is_success():
        extraction = result.value
    else:
        logger.error(f"Error: {result.error} (code={result.code})")
"""
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union, Optional

T = TypeVar('T')


@dataclass
class Success(Generic[T]):
    """Resultado exitoso con un valor."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass
class Failure:
    """Resultado fallido con código de error y detalles opcionales."""
    error: str
    code: str = "UNKNOWN"
    details: Optional[dict] = field(default_factory=dict)

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


Result = Union[Success[T], Failure]


def success(value: T) -> Success[T]:
    return Success(value)


def failure(error: str, code: str = "UNKNOWN", details: dict = None) -> Failure:
    return Failure(error=error, code=code, details=details or {})
