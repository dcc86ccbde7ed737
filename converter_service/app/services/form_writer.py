"""
form_writer.py — Archivo de formulario de la pantalla (.scm)
============================================================

Responsabilidad: describir los componentes colocados en la pantalla.

El formulario es un documento JSON dentro del envoltorio de App Inventor:

    #|
    $JSON
    {...}
    |#
"""

import json
import random
from typing import Callable, Dict, List

from ..domain.ir_models import ParsedCode
from .component_catalog import ComponentCatalog

FORM_YA_VERSION = "82"
FORM_VERSION = "11"

IdSource = Callable[[], str]


def random_uuid() -> str:
    """Id de componente pseudo-único, como los escribe App Inventor."""
    return str(random.randrange(1_000_000_000))


def default_properties(name: str, kind: str) -> Dict[str, str]:
    """Propiedades propias de un componente recién colocado."""
    if kind == "Button":
        return {"Text": name}
    if kind == "Label":
        return {"Text": name, "FontSize": "14"}
    return {}


def wrap_form_json(form: dict) -> str:
    return f"#|\n$JSON\n{json.dumps(form, separators=(',', ':'))}\n|#"


class FormWriter:
    """Construye el descriptor de formulario de una pantalla."""

    def __init__(self, catalog: ComponentCatalog, id_source: IdSource = random_uuid, screen_name: str = "Screen1"):
        self.catalog = catalog
        self.id_source = id_source
        self.screen_name = screen_name

    def build(self, parsed: ParsedCode) -> dict:
        components: List[dict] = []
        used_extensions: List[str] = []
        # Las llamadas a procedimiento registran su nombre como componente.
        procedures = {p.name for p in parsed.procedures}

        for name in parsed.components:
            if self.catalog.is_screen(name) or name in procedures:
                continue

            kind = self.catalog.kind_of(name)
            if self.catalog.is_extension(kind) and kind not in used_extensions:
                used_extensions.append(kind)

            component = {
                "$Name": name,
                "$Type": kind,
                "$Version": self.catalog.tables.version_of(kind),
                "Uuid": self.id_source(),
            }
            component.update(default_properties(name, kind))
            components.append(component)

        properties = {
            "$Name": self.screen_name,
            "$Type": "Form",
            "$Version": FORM_VERSION,
            "Uuid": "0",
            "Title": self.screen_name,
            "$Components": components,
        }

        if used_extensions:
            properties["$Extensions"] = [
                {
                    "$Name": kind,
                    "$Version": self.catalog.registry[kind].version,
                    "$UUID": self.catalog.registry[kind].uuid,
                }
                for kind in used_extensions
            ]

        return {"YaVersion": FORM_YA_VERSION, "Source": "Form", "Properties": properties}

    def render(self, parsed: ParsedCode) -> str:
        return wrap_form_json(self.build(parsed))
