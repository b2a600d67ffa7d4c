"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Los colaboradores (URL de la plataforma, coleccion de sistema, tipo de
    media, ruta del storage) se leen aqui una sola vez y se pasan
    explicitamente a cada constructor desde la raiz de composicion.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Commerce Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Base de datos - Componentes separados
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="sync_user")
    DATABASE_PASSWORD: str = Field(default="sync_pass")
    DATABASE_NAME: str = Field(default="commerce_sync")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # Plataforma e-commerce origen
    COMMERCE_BASE_URL: str = Field(default="http://localhost:8080")
    COMMERCE_HTTP_TIMEOUT_S: float = Field(default=30.0)

    # Media
    MEDIA_COLLECTION_KEY: str = Field(default="commerce_media")
    IMAGE_MEDIA_TYPE_ID: int = Field(default=2)
    MEDIA_STORAGE_PATH: str = Field(default="uploads/media")
    MEDIA_STORAGE_SEGMENTS: int = Field(default=10)

    # Lock por recurso (bridge lookup-or-create serializado por id externo)
    RESOURCE_LOCK_TIMEOUT_S: float = Field(default=60.0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


# Instancia global de configuracion
settings = Settings()
