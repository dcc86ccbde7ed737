"""
aia_generator.py — IR -> archivo de proyecto App Inventor (.aia)
================================================================

Responsabilidad: orquestar la generación de un archivo de proyecto.

Flujo:
    1. Validar la IR (un dict se valida como `ParsedCode`).
    2. Fusionar el registro de extensiones de esta llamada.
    3. Renderizar project.properties, Screen1.scm y Screen1.bky.
    4. Añadir los README de relleno y el contenido de las extensiones.
    5. Comprimir todo en un único zip.
"""

import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..domain.errors import GenerationInputError, PackagingError
from ..domain.extensions import ExtensionDescriptor
from ..domain.ir_models import ParsedCode
from ..domain.tables import DEFAULT_TABLES, GeneratorTables
from ..infrastructure.archive import ArchiveBuilder
from .blocks_writer import BlocksWriter
from .component_catalog import ComponentCatalog
from .form_writer import FormWriter, IdSource, random_uuid

logger = logging.getLogger(__name__)

PROPERTIES_PATH = "youngandroidproject/project.properties"
ASSETS_DIR = "assets"

ASSETS_README = (
    "This is the assets folder for your project.\n\n"
    "Any files you add here will be packaged with your application.\n\n"
    "If you have media files that you want to use in your app, copy them to this folder."
)
BUILD_README = (
    "This is the build folder for your project.\n\n"
    "Files in this folder are generated automatically by App Inventor.\n\n"
    "Do not edit the files in this folder."
)


def project_properties(cfg: Settings) -> str:
    return "\n".join([
        f"main={cfg.main_class}",
        f"name={cfg.PROJECT_NAME}",
        "assets=../assets",
        "source=../src",
        "build=../build",
        f"versioncode={cfg.VERSION_CODE}",
        f"versionname={cfg.VERSION_NAME}",
        "useslocation=False",
    ])


def coerce_parsed_code(ir: Any) -> ParsedCode:
    """
    Acepta un `ParsedCode` o su forma serializada (dict).

    Raises:
        GenerationInputError: si falta la IR o no tiene la forma esperada.
    """
    if ir is None:
        raise GenerationInputError("Parsed code is null or undefined")
    if isinstance(ir, ParsedCode):
        if not isinstance(ir.events, list) or not isinstance(ir.components, list):
            raise GenerationInputError("Invalid parsed code: events or components is not a list")
        return ir
    if not isinstance(ir, dict):
        raise GenerationInputError(f"Invalid parsed code: expected a mapping, got {type(ir).__name__}")
    for key in ("events", "components"):
        if not isinstance(ir.get(key), list):
            raise GenerationInputError(f"Invalid parsed code: {key} array is missing or invalid")
    try:
        return ParsedCode.model_validate(ir)
    except ValidationError as e:
        raise GenerationInputError(f"Invalid parsed code: {e}") from e


class AiaGenerator:
    """
    Generador de archivos de proyecto App Inventor.

    Solo guarda configuración (settings, tablas, fuente de ids); cada llamada
    a `generate` trabaja con objetos nuevos.
    """

    def __init__(
        self,
        cfg: Optional[Settings] = None,
        tables: GeneratorTables = DEFAULT_TABLES,
        id_source: IdSource = random_uuid,
    ):
        self.cfg = cfg or default_settings
        self.tables = tables
        self.id_source = id_source

    def render_sources(self, ir: Any, extensions: Iterable[ExtensionDescriptor] = ()) -> dict:
        """Entradas de texto del archivo, indexadas por ruta."""
        parsed = coerce_parsed_code(ir)
        catalog = ComponentCatalog(extensions, self.tables)
        src = self.cfg.source_dir
        screen = self.cfg.SCREEN_NAME

        form = FormWriter(catalog, self.id_source, screen).render(parsed)
        blocks = BlocksWriter(catalog, self.cfg.BLOCK_X, self.cfg.BLOCK_Y_START).render(parsed)

        return {
            PROPERTIES_PATH: project_properties(self.cfg),
            f"{src}/{screen}.scm": form,
            f"{src}/{screen}.bky": blocks,
            f"{ASSETS_DIR}/README.txt": ASSETS_README,
            "build/README.txt": BUILD_README,
        }

    def generate(self, ir: Any, extensions: Iterable[ExtensionDescriptor] = ()) -> bytes:
        """
        Construye el archivo `.aia`.

        Args:
            ir: `ParsedCode` (o su forma dict) sin diagnósticos.
            extensions: descriptores de extensión aportados por el cliente.

        Returns:
            bytes: el archivo zip.

        Raises:
            GenerationInputError: IR inválida, o dos entradas del archivo con
                el mismo nombre; no se emite nada.
            PackagingError: no se pudo leer el contenido de una extensión o
                escribir el archivo.
        """
        extensions: List[ExtensionDescriptor] = list(extensions)
        entries = self.render_sources(ir, extensions)

        archive = ArchiveBuilder(self.cfg.COMPRESSION_LEVEL)
        for name, content in entries.items():
            archive.add(name, content)

        for ext in extensions:
            if not ext.has_payload:
                continue
            entry = f"{ASSETS_DIR}/{ext.file_name}"
            if entry in archive:
                raise GenerationInputError(
                    f"Extension file {ext.file_name} collides with another archive entry"
                )
            archive.add(entry, self._read_payload(ext))
            logger.info("Añadido archivo de extensión %s", ext.file_name)

        try:
            data = archive.to_bytes()
        except (OSError, ValueError) as e:
            raise PackagingError(f"Failed to write archive: {e}") from e

        logger.info("Generación AIA completada: %d entradas, %d bytes", len(archive.names()), len(data))
        return data

    @staticmethod
    def _read_payload(ext: ExtensionDescriptor) -> bytes:
        if ext.payload is not None:
            return ext.payload
        try:
            return ext.path.read_bytes()
        except OSError as e:
            raise PackagingError(
                f"Failed to add extension file {ext.file_name}: {e}",
                file_name=ext.file_name,
            ) from e


def generate_aia(
    ir: Any,
    extensions: Iterable[ExtensionDescriptor] = (),
    id_source: IdSource = random_uuid,
) -> bytes:
    """Genera un archivo con la configuración y tablas por defecto."""
    return AiaGenerator(id_source=id_source).generate(ir, extensions)
