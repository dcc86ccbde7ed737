"""
Configuración del microservicio conversor.

Usa `pydantic-settings` para cargar valores desde variables de entorno y/o
un archivo `.env`. Cada atributo de `Settings` puede sobreescribirse con una
variable de entorno del mismo nombre.

Ejemplo de `.env`:
    ENV=prod
    LOG_LEVEL=DEBUG
    PROJECT_NAME=MyApp
    USER_NAMESPACE=appinventor.ai_someone
    COMPRESSION_LEVEL=9
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración central del conversor.

    Atributos principales:
        APP_NAME:
            Nombre de la aplicación (se muestra en la documentación de FastAPI).
        ENV:
            Entorno de ejecución: "dev", "prod", "test", ...
        LOG_LEVEL:
            Nivel del logging raíz que configura `create_app`.
        PROJECT_NAME:
            Nombre del proyecto App Inventor escrito en project.properties.
        USER_NAMESPACE:
            Namespace con puntos bajo el que vive el código del proyecto.
        SCREEN_NAME:
            Nombre de la única pantalla generada.
        VERSION_CODE / VERSION_NAME:
            Metadatos de versión de la app.
        COMPRESSION_LEVEL:
            Nivel deflate del archivo generado (0-9).
        COMMENT_PREFIX:
            Marca de las líneas de comentario del pseudocódigo.
        BLOCK_X / BLOCK_Y_START:
            Posición en el workspace del primer bloque generado.
    """

    APP_NAME: str = "converter_service"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Proyecto destino
    PROJECT_NAME: str = "ConvertedApp"
    USER_NAMESPACE: str = "appinventor.ai_anonymous"
    SCREEN_NAME: str = "Screen1"
    VERSION_CODE: int = 1
    VERSION_NAME: str = "1.0"

    # Empaquetado
    COMPRESSION_LEVEL: int = 6

    # Dialecto de entrada / disposición
    COMMENT_PREFIX: str = "//"
    BLOCK_X: int = 20
    BLOCK_Y_START: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @property
    def source_dir(self) -> str:
        """`src/appinventor/ai_anonymous/ConvertedApp`."""
        return "/".join(["src", *self.USER_NAMESPACE.split("."), self.PROJECT_NAME])

    @property
    def main_class(self) -> str:
        return f"{self.USER_NAMESPACE}.{self.PROJECT_NAME}.{self.SCREEN_NAME}"


# Instancia única de configuración usada por el resto de la app
settings = Settings()
