"""
component_catalog.py — Nombre de componente -> tipo de componente
=================================================================

Responsabilidad: clasificar nombres de componente y mantener el registro de
extensiones de una generación (las integradas más las que aporta el cliente).
"""

from typing import Dict, Iterable, Optional

from ..domain.extensions import ExtensionDescriptor
from ..domain.tables import DEFAULT_TABLES, SCREEN_PREFIX, GeneratorTables, KnownExtension


def _longest_prefix(name: str, prefixes: Iterable[str]) -> Optional[str]:
    best = None
    for prefix in prefixes:
        if name.startswith(prefix) and (best is None or len(prefix) > len(best)):
            best = prefix
    return best


class ComponentCatalog:
    """
    Clasificador construido de nuevo en cada generación.

    El registro es un dict nuevo; no se modifica ni la tabla integrada ni la
    lista del cliente.
    """

    def __init__(
        self,
        extensions: Iterable[ExtensionDescriptor] = (),
        tables: GeneratorTables = DEFAULT_TABLES,
    ):
        self.tables = tables
        self.registry: Dict[str, KnownExtension] = dict(tables.extensions)
        for ext in extensions:
            self.registry[ext.name] = KnownExtension(name=ext.name, version=ext.version, uuid=ext.uuid)

    @staticmethod
    def is_screen(name: str) -> bool:
        return name.startswith(SCREEN_PREFIX)

    def is_extension(self, kind: str) -> bool:
        return kind in self.registry

    def kind_of(self, name: Optional[str]) -> str:
        """
        Tipo de componente de `name`.

        La extensión más larga que es prefijo de `name`, después el prefijo
        integrado más largo y por último el tipo por defecto.
        """
        if not name:
            return self.tables.default_kind

        ext = _longest_prefix(name, self.registry)
        if ext is not None:
            return ext

        prefix = _longest_prefix(name, self.tables.component_kinds)
        if prefix is not None:
            return self.tables.component_kinds[prefix]

        return self.tables.default_kind
