# Core module - resultados y excepciones base
from .result import success, failure, Success, Failure, Result
from .exceptions import (
    SriAtsError, ReportGenerationError, ValidationError
)

__all__ = [
    # Result
    'success', 'failure', 'Success', 'Failure', 'Result',
    # Exceptions
    'SriAtsError', 'ReportGenerationError', 'ValidationError',
]
