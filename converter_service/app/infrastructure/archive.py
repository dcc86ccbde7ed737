"""
archive.py — Archivo zip en memoria
===================================

Responsabilidad: reunir entradas de texto/binarias con nombre y producir los
bytes del archivo final. Las entradas llevan una fecha fija, así que el mismo
contenido siempre da los mismos bytes.
"""

import io
import zipfile
from typing import Dict, Union

FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class ArchiveBuilder:
    """Conjunto ordenado de entradas del archivo, comprimido en `to_bytes()`."""

    def __init__(self, compression_level: int = 6):
        self.compression_level = compression_level
        self._entries: Dict[str, bytes] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def names(self):
        return list(self._entries)

    def add(self, name: str, data: Union[str, bytes]) -> None:
        """Añade (o reemplaza) una entrada; el texto se guarda en UTF-8."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._entries[name] = data

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED,
                             compresslevel=self.compression_level) as zf:
            for name, data in self._entries.items():
                info = zipfile.ZipInfo(name, date_time=FIXED_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                zf.writestr(info, data, compresslevel=self.compression_level)
        return buffer.getvalue()
