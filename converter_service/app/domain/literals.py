"""Clasificación de literales de valor.

El parser conserva los valores como texto; el generador decide aquí en qué
bloque literal de Blockly se convierte cada uno. Reglas, en orden:

1. nombre de color conocido -> bloque de color con su código &HAARRGGBB
2. solo dígitos ASCII       -> math_number
3. true / false             -> logic_boolean (en mayúsculas)
4. #RRGGBB                  -> bloque de color con &HFFRRGGBB
5. cualquier otra cosa      -> text (las expresiones se incrustan, no se evalúan)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Tuple

from .tables import COLORS, CUSTOM_COLOR_BLOCK

_DIGITS = re.compile(r"[0-9]+")
_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


class LiteralKind(str, Enum):
    COLOR = "color"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(frozen=True)
class Literal:
    """Valor clasificado: tipo de bloque, nombre del título y texto del título."""

    kind: LiteralKind
    block_type: str
    title: str
    text: str


def hex_to_color_code(value: str) -> str:
    """`#ff8800` -> `&HFFFF8800`."""
    return f"&HFF{value[1:].upper()}"


def classify_literal(value: str, colors: Mapping[str, Tuple[str, str]] = COLORS) -> Literal:
    """Clasifica un valor en el bloque literal que lo representa."""
    if value in colors:
        block_type, code = colors[value]
        return Literal(LiteralKind.COLOR, block_type, "COLOR", code)

    if _DIGITS.fullmatch(value):
        return Literal(LiteralKind.NUMBER, "math_number", "NUM", value)

    if value.lower() in ("true", "false"):
        return Literal(LiteralKind.BOOLEAN, "logic_boolean", "BOOL", value.upper())

    if _HEX_COLOR.fullmatch(value):
        return Literal(LiteralKind.COLOR, CUSTOM_COLOR_BLOCK, "COLOR", hex_to_color_code(value))

    return Literal(LiteralKind.TEXT, "text", "TEXT", value)
