# ============================================================================
# converter_service/app/infrastructure/__init__.py
# ============================================================================
"""
Capa de infraestructura - Dependencias externas (Lark, empaquetado zip)
"""

from .archive import ArchiveBuilder
from .grammar_loader import GrammarLoader
from .lark_parser import LineParser, get_line_parser

__all__ = ["ArchiveBuilder", "GrammarLoader", "LineParser", "get_line_parser"]
