import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Cargar variables de entorno desde el archivo .env
load_dotenv(encoding="utf-8")

class Settings(BaseSettings):
    # App
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "sri_ats.log")
    TIMEZONE: str = os.getenv("TIMEZONE", "America/Guayaquil")

    # API
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", 8000))

    # Upload (ZIP con comprobantes)
    MAX_ZIP_FILE_SIZE: int = int(os.getenv("MAX_ZIP_FILE_SIZE", 50 * 1024 * 1024))  # 50MB
    MAX_DOCUMENTS_PER_REQUEST: int = int(os.getenv("MAX_DOCUMENTS_PER_REQUEST", 10000))

    # Parser
    PARSER_MAX_WORKERS: int = int(os.getenv("PARSER_MAX_WORKERS", 8))  # Hilos para parse_xml_batch
    PARSER_STRICT_DEFAULT: bool = os.getenv("PARSER_STRICT_DEFAULT", "false").lower() in ("1", "true", "yes")

    # Exportación
    XLSX_CREATOR: str = os.getenv("XLSX_CREATOR", "sri-ats")

    model_config = {
        "env_file": ".env",
        "extra": "ignore"  # Ignorar campos adicionales en lugar de lanzar un error
    }

settings = Settings()
