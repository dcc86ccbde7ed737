"""Excepciones del generador de archivos.

Los problemas de parseo nunca se lanzan: viajan como `Diagnostic` en
`ParsedCode.errors`.
"""


class GenerationError(Exception):
    """Clase base de los fallos de una llamada a `generate`."""


class GenerationInputError(GenerationError, ValueError):
    """La IR entregada al generador falta o es estructuralmente inválida."""


class PackagingError(GenerationError):
    """Falló la construcción del archivo (p.ej. contenido de extensión ilegible)."""

    def __init__(self, message: str, file_name: str = None):
        super().__init__(message)
        self.file_name = file_name
