"""Capa de dominio - IR, tablas, literales y errores del conversor."""

from .ir_models import (
    Diagnostic, SetProperty, Assign, Call, Define, If, While, ForEach,
    Action, Variable, Procedure, Event, ParsedCode,
)
from .extensions import ExtensionDescriptor
from .errors import GenerationError, GenerationInputError, PackagingError
from .literals import LiteralKind, Literal, classify_literal
from .tables import GeneratorTables, KnownExtension, DEFAULT_TABLES

__all__ = [
    "Diagnostic", "SetProperty", "Assign", "Call", "Define", "If", "While", "ForEach",
    "Action", "Variable", "Procedure", "Event", "ParsedCode",
    "ExtensionDescriptor",
    "GenerationError", "GenerationInputError", "PackagingError",
    "LiteralKind", "Literal", "classify_literal",
    "GeneratorTables", "KnownExtension", "DEFAULT_TABLES",
]
