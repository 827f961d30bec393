"""
Pydantic Configuration Schemas
================================

Type-safe configuration validation usando Pydantic v2.

Fuentes (en orden de prioridad):
1. Variables de entorno REDIS_* (y .env vía python-dotenv)
2. YAML de configuración
3. Defaults de los modelos

Usage:
    config = EmitterConfig.from_yaml("config/sio_emitter/config.yaml")
    emitter = Emitter.from_config(config)
"""
from typing import Literal, Optional
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from ..routing import DEFAULT_KEY, SEPARATOR


# ============================================================================
# Redis Configuration
# ============================================================================

class RedisSettings(BaseModel):
    """Redis connection settings"""
    host: str = Field(
        default="localhost",
        description="Redis hostname"
    )
    port: int = Field(
        default=6379,
        ge=1,
        le=65535,
        description="Redis port"
    )
    password: Optional[str] = Field(
        default=None,
        description="Redis password (optional, from env)"
    )
    db: int = Field(
        default=0,
        ge=0,
        description="Redis database index"
    )


class RedisEnvSettings(BaseSettings):
    """
    Overrides de conexión desde entorno (REDIS_HOST, REDIS_PORT, REDIS_PASSWORD, REDIS_DB).

    Solo los campos presentes en el entorno pisan al YAML.
    """
    model_config = SettingsConfigDict(env_prefix="REDIS_", extra="ignore")

    host: Optional[str] = None
    port: Optional[int] = None
    password: Optional[str] = None
    db: Optional[int] = None

    def overrides(self) -> dict:
        return self.model_dump(exclude_none=True)


# ============================================================================
# Emitter Configuration
# ============================================================================

class EmitterSettings(BaseModel):
    """Emitter behaviour settings"""
    key: str = Field(
        default=DEFAULT_KEY,
        description="Key prefix de los canales Redis"
    )
    force_binary: bool = Field(
        default=False,
        description="Marcar todo packet como BINARY_EVENT (comportamiento legacy)"
    )
    on_publish_error: Literal['collect', 'raise'] = Field(
        default='collect',
        description="Qué hacer si falla algún canal: devolver en el resultado o lanzar PublishError"
    )

    @field_validator('key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Key no vacía y sin el separador de canales"""
        if not v:
            raise ValueError("key must not be empty")
        if SEPARATOR in v:
            raise ValueError(f"key must not contain '{SEPARATOR}', got {v!r}")
        return v


# ============================================================================
# Logging Configuration
# ============================================================================

class LoggingSettings(BaseModel):
    """Logging configuration (JSON structured logging)"""
    level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        default='INFO',
        description="Log level"
    )
    json_indent: Optional[int] = Field(
        default=None,
        ge=0,
        le=4,
        description="JSON indent for pretty-print (None=compact, 2=readable)"
    )
    redis_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        default='WARNING',
        description="redis-py library log level"
    )
    file: Optional[str] = Field(
        default=None,
        description="Path to log file (None=stdout). If specified, enables file rotation."
    )
    max_bytes: int = Field(
        default=10485760,  # 10 MB
        ge=1024,
        description="Maximum bytes per log file before rotation (default 10 MB)"
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        description="Number of backup log files to keep"
    )


# ============================================================================
# Root Configuration
# ============================================================================

class EmitterConfig(BaseModel):
    """
    Root configuration.

    Carga desde YAML; las variables REDIS_* pisan la conexión.
    """
    redis: RedisSettings = Field(default_factory=RedisSettings)
    emitter: EmitterSettings = Field(default_factory=EmitterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, config_path: str) -> 'EmitterConfig':
        """
        Load and validate configuration from YAML file.

        Args:
            config_path: Path to config.yaml

        Returns:
            Validated EmitterConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        import yaml

        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create it from config/sio_emitter/config.yaml.example"
            )

        with open(config_file, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls._with_env_overrides(config_dict)

    @classmethod
    def from_env(cls) -> 'EmitterConfig':
        """Config solo con defaults + entorno (sin YAML)."""
        return cls._with_env_overrides({})

    @classmethod
    def _with_env_overrides(cls, config_dict: dict) -> 'EmitterConfig':
        load_dotenv()

        overrides = RedisEnvSettings().overrides()
        if overrides:
            redis_cfg = dict(config_dict.get('redis') or {})
            redis_cfg.update(overrides)
            config_dict = {**config_dict, 'redis': redis_cfg}

        return cls(**config_dict)
