"""Capa de servicios - Parseo y generación del archivo .aia."""

from .pseudo_parser import PseudoCodeParser, ParserConfig, parse_pseudocode
from .component_catalog import ComponentCatalog
from .form_writer import FormWriter
from .blocks_writer import BlocksWriter
from .aia_generator import AiaGenerator, generate_aia

__all__ = [
    "PseudoCodeParser",
    "ParserConfig",
    "parse_pseudocode",
    "ComponentCatalog",
    "FormWriter",
    "BlocksWriter",
    "AiaGenerator",
    "generate_aia",
]
