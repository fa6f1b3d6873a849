"""
Excepciones base estandarizadas para sri-ats.

El parser de comprobantes nunca lanza excepciones hacia afuera (devuelve
ParserResult con errores). Estas excepciones cubren las capas externas:
generación de archivos y validación de requests.

Jerarquía:
    SriAtsError (base)
    ├── ReportGenerationError
    └── ValidationError
"""
from typing import Optional, Dict, Any


class SriAtsError(Exception):
    """
    Base exception para todos los errores de sri-ats.

    Attributes:
        message: Mensaje descriptivo del error.
        code: Código único para identificar el tipo de error.
        details: Información adicional para debugging.
    """
    code: str = "SRI_ATS_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        code: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        self.cause = cause
        if code:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializa el error al formato de respuesta de la API."""
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            },
        }


class ReportGenerationError(SriAtsError):
    """No se pudo generar el archivo del reporte ATS."""
    code = "ATS_GENERATION_FAILED"
    status_code = 500


class ValidationError(SriAtsError):
    """Errores de validación de datos de entrada."""
    code = "ATS_INVALID_REQUEST"
    status_code = 400
