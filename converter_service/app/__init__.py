"""Converter Service Application.

Microservicio que convierte pseudocódigo por líneas en proyectos de
MIT App Inventor (.aia).

Arquitectura:
    - api/: Endpoints FastAPI (capa HTTP)
    - domain/: Modelos de la IR, tablas, clasificación de literales, errores
    - grammar/: Gramática Lark de una línea de pseudocódigo
    - infrastructure/: Dependencias externas (Lark, empaquetado zip)
    - services/: Parser, escritores de formulario/bloques y generación del .aia
    - schemas.py: Modelos Request/Response (Pydantic)
    - config.py: Configuración (pydantic-settings)

Uso:
    from app.services import parse_pseudocode, generate_aia
    # uvicorn app.main:app --reload
"""

__version__ = "1.0.0"
