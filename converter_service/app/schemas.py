"""Esquemas de entrada/salida del microservicio conversor.

Define los modelos de request y response de los endpoints:
- `/parse`: pseudocódigo a IR
- `/generate`: pseudocódigo (más extensiones) a un archivo `.aia`

Usa Pydantic para validación y serialización JSON.
"""

import base64
import binascii
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .domain.extensions import ExtensionDescriptor
from .domain.ir_models import Diagnostic, ParsedCode


# MODELOS DE REQUEST

class ParseReq(BaseModel):
    """
    Modelo de request de `/parse`.

    Attributes:
        code (str): pseudocódigo a parsear.
    """
    code: str


class ExtensionIn(BaseModel):
    """
    Extensión enviada por el cliente.

    Si faltan `name` o `uuid`, se derivan del nombre del archivo `.aix`
    (como al subir una extensión desde el editor).

    Attributes:
        name (Optional[str]): tipo de componente que aporta la extensión.
        version (str): versión de la extensión.
        uuid (Optional[str]): identificador de la extensión.
        file_name (Optional[str]): nombre original del archivo `.aix`.
        payload_b64 (Optional[str]): contenido del `.aix` en base64.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    version: str = "1"
    uuid: Optional[str] = Field(default=None, min_length=1)
    file_name: Optional[str] = None
    payload_b64: Optional[str] = None

    @field_validator("payload_b64")
    @classmethod
    def _check_base64(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"payload_b64 no es base64 válido: {e}") from e
        return v

    def to_descriptor(self) -> ExtensionDescriptor:
        """
        Construye el descriptor de dominio.

        Raises:
            ValueError: datos insuficientes o archivo que no es `.aix`.
        """
        payload = base64.b64decode(self.payload_b64) if self.payload_b64 is not None else None

        if self.name is None or self.uuid is None:
            if not self.file_name:
                raise ValueError("La extensión necesita name y uuid, o un file_name .aix")
            derived = ExtensionDescriptor.from_aix(self.file_name, payload)
            return ExtensionDescriptor(
                name=self.name or derived.name,
                version=self.version,
                uuid=self.uuid or derived.uuid,
                file_name=derived.file_name,
                payload=payload,
            )

        return ExtensionDescriptor(
            name=self.name,
            version=self.version,
            uuid=self.uuid,
            file_name=self.file_name,
            payload=payload,
        )


class GenerateReq(BaseModel):
    """
    Modelo de request de `/generate`.

    Attributes:
        code (str): pseudocódigo a convertir.
        extensions (List[ExtensionIn]): extensiones a registrar y empaquetar.
    """
    code: str
    extensions: List[ExtensionIn] = Field(default_factory=list)


# MODELOS DE RESPONSE

class ParseResp(BaseModel):
    """
    Response de `/parse`.

    Attributes:
        ok (bool): True si el código no tiene diagnósticos.
        parsed (ParsedCode): la IR, siempre presente.
        errors (List[Diagnostic]): diagnósticos (vacío si ok=True).
    """
    ok: bool
    parsed: ParsedCode
    errors: List[Diagnostic] = Field(default_factory=list)
