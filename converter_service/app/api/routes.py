"""Endpoints del microservicio conversor.

Responsabilidad única: manejar requests/responses HTTP y traducir los errores
de dominio a códigos de estado. El parseo y la generación viven en `services/`.
"""

from typing import Dict

from fastapi import APIRouter, HTTPException, Response

from .. import __version__
from ..config import settings
from ..domain.errors import GenerationInputError, PackagingError
from ..schemas import GenerateReq, ParseReq, ParseResp
from ..services.aia_generator import AiaGenerator
from ..services.pseudo_parser import ParserConfig, PseudoCodeParser

AIA_MEDIA_TYPE = "application/zip"

router = APIRouter(
    prefix="",
    tags=["converter"],
    responses={
        422: {"description": "El pseudocódigo tiene diagnósticos de sintaxis"},
        500: {"description": "Error interno de empaquetado"},
    },
)


def _parser() -> PseudoCodeParser:
    return PseudoCodeParser(ParserConfig(comment_prefix=settings.COMMENT_PREFIX))


@router.post("/parse", response_model=ParseResp)
def parse(req: ParseReq) -> ParseResp:
    """Parsea pseudocódigo a la IR.

    Args:
        req: request con el código a parsear

    Returns:
        ParseResp con la IR y sus diagnósticos (ok=False si hay alguno)
    """
    parsed = _parser().parse(req.code)
    return ParseResp(ok=parsed.ok, parsed=parsed, errors=parsed.errors)


@router.post("/generate")
def generate(req: GenerateReq) -> Response:
    """Convierte pseudocódigo en un archivo `.aia` descargable.

    La generación se rechaza mientras el código tenga diagnósticos.
    """
    parsed = _parser().parse(req.code)
    if not parsed.ok:
        raise HTTPException(
            status_code=422,
            detail=[e.model_dump() for e in parsed.errors],
        )

    try:
        extensions = [ext.to_descriptor() for ext in req.extensions]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        data = AiaGenerator(settings).generate(parsed, extensions)
    except GenerationInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PackagingError as e:
        raise HTTPException(status_code=500, detail=f"AIA generation failed: {e}")

    return Response(
        content=data,
        media_type=AIA_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{settings.PROJECT_NAME}.aia"'},
    )


@router.get("/health")
def health() -> Dict[str, str]:
    """Endpoint de salud del servicio."""
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": __version__,
    }
