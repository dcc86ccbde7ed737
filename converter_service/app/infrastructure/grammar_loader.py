"""
grammar_loader.py — Carga de la gramática Lark del pseudocódigo
===============================================================

Responsabilidad única: leer y cachear la gramática desde el archivo.
"""

from functools import lru_cache
from pathlib import Path


class GrammarLoader:
    """Cargador de la gramática de línea con cache."""

    _grammar_path = Path(__file__).parents[1] / "grammar" / "pseudocode.lark"

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls) -> str:
        """
        Carga la gramática desde el archivo .lark

        Returns:
            str: Contenido de la gramática

        Raises:
            FileNotFoundError: Si no se encuentra el archivo
        """
        if not cls._grammar_path.exists():
            raise FileNotFoundError(
                f"Archivo de gramática no encontrado: {cls._grammar_path}"
            )

        return cls._grammar_path.read_text(encoding="utf-8")

    @classmethod
    def get_path(cls) -> Path:
        """Retorna la ruta del archivo de gramática."""
        return cls._grammar_path
