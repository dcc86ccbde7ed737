"""
api
===

Router FastAPI del servicio conversor (/parse, /generate, /health).

Controladores delgados: los endpoints validan la request, delegan en
`services/` y traducen los errores de dominio a códigos HTTP.

    from app.api import router
    app.include_router(router)
"""

from .routes import router

__all__ = ["router"]
