#!/usr/bin/env python3
import uvicorn

from sri_ats.config.settings import settings
from sri_ats.utils.date_utils import now_local


def main():
    print(f"[INFO] Zona horaria configurada: {settings.TIMEZONE}")
    print(f"[INFO] Hora actual: {now_local().strftime('%Y-%m-%d %H:%M:%S %Z')}")

    uvicorn.run(
        "sri_ats.api.api:app",   # Usar string de importación en lugar del objeto
        host=settings.API_HOST,
        port=settings.API_PORT,
        workers=1,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False
    )


if __name__ == "__main__":
    main()
