"""
Punto de entrada principal del microservicio conversor.

Expone `create_app` para facilitar tests e integración con servidores ASGI
(Uvicorn, Gunicorn, ...), y una instancia global `app` que se usa por
defecto al ejecutar directamente con Uvicorn:

    uvicorn app.main:app --reload
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from . import __version__
from .api.routes import router
from .config import settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Crea y configura la aplicación FastAPI.

    - Configura el logging a partir de `settings.LOG_LEVEL`.
    - Configura CORS para que el front del editor pueda llamar a la API.
    - Registra cada request con su estado y duración.
    - Registra las rutas del conversor.

    Returns:
        Instancia `FastAPI` configurada.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Converter Service",
        description="Conversor de pseudocódigo a proyectos MIT App Inventor (.aia).",
        version=__version__,
    )

    # --- Configuración de CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # En producción, listar los orígenes permitidos
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s en %.0fms", request.method, request.url.path, response.status_code, duration_ms)
        return response

    # --- Rutas del conversor ---
    app.include_router(router)

    logger.info("Converter Service iniciado - env=%s proyecto=%s", settings.ENV, settings.PROJECT_NAME)

    return app


# Instancia por defecto usada por Uvicorn
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
