"""Descriptores de extensiones aportadas por el cliente.

Una extensión es un tipo de componente no incluido en App Inventor,
opcionalmente acompañado de su archivo `.aix`, que acaba bajo `assets/` en el
archivo generado.
"""

from pathlib import Path, PurePosixPath
from typing import Optional

from pydantic import BaseModel, Field, model_validator

AIX_SUFFIX = ".aix"


def entry_basename(file_name: str) -> str:
    """
    Reduce un nombre de archivo a su último componente.

    Acepta separadores `/` y `\\`; `../../x.aix` queda en `x.aix`.

    Raises:
        ValueError: si no queda un nombre utilizable.
    """
    base = PurePosixPath(file_name.replace("\\", "/")).name
    if not base or base in (".", ".."):
        raise ValueError(f"Nombre de archivo de extensión inválido: {file_name!r}")
    return base


class ExtensionDescriptor(BaseModel):
    """
    Registro de extensión aportado por el cliente.

    Attributes:
        name (str): tipo de componente / prefijo de nombre (p.ej. "GestureDetector").
        version (str): versión escrita en el manifiesto.
        uuid (str): identificador escrito en el manifiesto.
        file_name (Optional[str]): nombre del archivo, siempre sin directorios.
        payload (Optional[bytes]): contenido ya en memoria.
        path (Optional[Path]): contenido leído de disco al empaquetar.
    """
    name: str = Field(min_length=1)
    version: str = "1"
    uuid: str = Field(min_length=1)
    file_name: Optional[str] = None
    payload: Optional[bytes] = None
    path: Optional[Path] = None

    @model_validator(mode="after")
    def _fill_file_name(self) -> "ExtensionDescriptor":
        if self.file_name is None and self.path is not None:
            self.file_name = self.path.name
        if self.file_name is not None:
            self.file_name = entry_basename(self.file_name)
        if self.payload is not None and not self.file_name:
            raise ValueError(f"la extensión '{self.name}' tiene contenido pero no nombre de archivo")
        return self

    @property
    def has_payload(self) -> bool:
        return self.payload is not None or self.path is not None

    @classmethod
    def from_aix(cls, file_name: str, payload: Optional[bytes] = None) -> "ExtensionDescriptor":
        """
        Deriva un descriptor del nombre de un archivo `.aix` subido.

        `GestureDetector.aix` da nombre `GestureDetector`, versión `1` y uuid
        `com.extension.gesturedetector`.

        Raises:
            ValueError: si el archivo no es un `.aix`.
        """
        base = entry_basename(file_name)
        if not base.lower().endswith(AIX_SUFFIX) or len(base) == len(AIX_SUFFIX):
            raise ValueError(f"No es un archivo de extensión .aix: {file_name}")
        name = base[: -len(AIX_SUFFIX)]
        return cls(
            name=name,
            version="1",
            uuid=f"com.extension.{name.lower()}",
            file_name=base,
            payload=payload,
        )
