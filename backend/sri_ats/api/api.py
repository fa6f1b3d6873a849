from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from datetime import datetime

from sri_ats.config.settings import settings
from sri_ats.core.exceptions import SriAtsError
from sri_ats.api.endpoints import ats, upload

# Configurar logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(settings.LOG_FILE)
    ]
)

logger = logging.getLogger(__name__)

# Crear la aplicación FastAPI
app = FastAPI(
    title="SRI ATS API",
    description="API para procesar comprobantes electrónicos del SRI y generar el Anexo Transaccional Simplificado",
    version="1.0.0"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # En producción, limitar a dominios específicos
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload.router, prefix="/api", tags=["upload"])
app.include_router(ats.router, prefix="/api", tags=["ats"])


@app.exception_handler(SriAtsError)
async def sri_ats_error_handler(request: Request, exc: SriAtsError):
    logger.error(f"{exc.code} en {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container health checks.

    Returns:
        dict: Simple health status.
    """
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
