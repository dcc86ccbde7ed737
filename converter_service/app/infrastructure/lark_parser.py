"""Configuración del parser LALR de líneas de pseudocódigo.

Responsabilidad: configurar Lark y reconocer UNA línea, devolviendo su parse
tree. La indentación y los bloques no son asunto de este módulo.
"""

from functools import lru_cache
from typing import Optional

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

from .grammar_loader import GrammarLoader


class LarkParserConfig:
    """Configuración del parser LALR."""

    START = "start"
    PARSER = "lalr"
    LEXER = "contextual"


class LineParser:
    """Parser de líneas basado en Lark.

    Singleton para no recompilar la gramática en cada llamada.
    """

    _instance = None
    _parser = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize_parser()
        return cls._instance

    def _initialize_parser(self) -> None:
        """Inicializa el parser Lark con la gramática cargada."""
        self._parser = Lark(
            GrammarLoader.load(),
            start=LarkParserConfig.START,
            parser=LarkParserConfig.PARSER,
            lexer=LarkParserConfig.LEXER,
        )

    def parse(self, line: str) -> Optional[Tree]:
        """Reconoce una línea (sin indentación).

        Args:
            line: Texto de la línea, ya recortado

        Returns:
            Tree cuyo `data` es el nombre de la forma reconocida
            (`event_header`, `set_property`, ...), o None si la línea no
            pertenece al dialecto.
        """
        try:
            return self._parser.parse(line)
        except UnexpectedInput:
            return None


@lru_cache(maxsize=1)
def get_line_parser() -> LineParser:
    """Factory function para obtener la instancia singleton del parser."""
    return LineParser()
