"""Tablas de consulta del formato destino de App Inventor.

Responsabilidad: guardar los datos inmutables que consulta el generador
(tipos de componente, versiones de esquema, nombres de color, extensiones
conocidas).

Las tablas son mappings congelados agrupados en `GeneratorTables`; quien
necesite otros datos construye su propia instancia en vez de mutar el módulo.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from pydantic import BaseModel


DEFAULT_COMPONENT_KIND = "Button"
SCREEN_PREFIX = "Screen"


# Prefijo del nombre -> tipo de componente de App Inventor
COMPONENT_KINDS: Mapping[str, str] = MappingProxyType({
    "Screen": "Form",
    "Button": "Button",
    "Label": "Label",
    "TextBox": "TextBox",
    "Image": "Image",
    "Player": "Player",
    "Clock": "Clock",
    "TinyDB": "TinyDB",
    "Notifier": "Notifier",
})

# Tipo de componente -> "$Version" escrito en el archivo del formulario
COMPONENT_VERSIONS: Mapping[str, str] = MappingProxyType({
    "Button": "7",
    "Label": "5",
    "TextBox": "6",
    "Image": "4",
    "Player": "6",
    "Clock": "4",
    "TinyDB": "2",
    "Notifier": "6",
})
DEFAULT_COMPONENT_VERSION = "1"

# Nombre de color -> (tipo de bloque de color, literal &HAARRGGBB)
COLORS: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "Red": ("color_red", "&HFFFF0000"),
    "Green": ("color_green", "&HFF00FF00"),
    "Blue": ("color_blue", "&HFF0000FF"),
    "Yellow": ("color_yellow", "&HFFFFFF00"),
    "White": ("color_white", "&HFFFFFFFF"),
    "Black": ("color_black", "&HFF000000"),
    "Gray": ("color_gray", "&HFF808080"),
    "Orange": ("color_orange", "&HFFFFA500"),
    "Purple": ("color_magenta", "&HFF800080"),
    "Pink": ("color_pink", "&HFFFFC0CB"),
})
# Tipo de bloque que lleva un literal escrito como #RRGGBB
CUSTOM_COLOR_BLOCK = "color_black"


class KnownExtension(BaseModel):
    """Entrada del registro de un tipo de componente no incluido en App Inventor."""
    name: str
    version: str
    uuid: str


BUILTIN_EXTENSIONS: Mapping[str, KnownExtension] = MappingProxyType({
    "GestureDetector": KnownExtension(
        name="GestureDetector",
        version="1",
        uuid="com.extension.aryan.gupta.gesturesdetector",
    ),
})


@dataclass(frozen=True)
class GeneratorTables:
    """Conjunto de todas las tablas que lee el generador."""

    component_kinds: Mapping[str, str] = field(default_factory=lambda: COMPONENT_KINDS)
    component_versions: Mapping[str, str] = field(default_factory=lambda: COMPONENT_VERSIONS)
    colors: Mapping[str, Tuple[str, str]] = field(default_factory=lambda: COLORS)
    extensions: Mapping[str, KnownExtension] = field(default_factory=lambda: BUILTIN_EXTENSIONS)
    default_kind: str = DEFAULT_COMPONENT_KIND

    def version_of(self, kind: str) -> str:
        return self.component_versions.get(kind, DEFAULT_COMPONENT_VERSION)


DEFAULT_TABLES = GeneratorTables()
