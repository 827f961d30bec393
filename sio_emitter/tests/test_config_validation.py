"""
Config Validation Tests
=======================

Tests de validación de configuración con Pydantic.

Invariantes testeadas:
1. Valores por defecto son válidos
2. Key sin separador "#"
3. Rangos (puerto, db)
4. YAML + overrides de entorno REDIS_*
"""
import pytest
from pydantic import ValidationError
from sio_emitter.config import (
    EmitterConfig,
    EmitterSettings,
    RedisSettings,
    LoggingSettings,
)


@pytest.fixture(autouse=True)
def clean_redis_env(monkeypatch):
    """Aísla los tests de variables REDIS_* del entorno."""
    for name in ("REDIS_HOST", "REDIS_PORT", "REDIS_PASSWORD", "REDIS_DB"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("sio_emitter.config.schemas.load_dotenv", lambda: False)


@pytest.mark.unit
@pytest.mark.config
class TestDefaults:
    """Tests de defaults"""

    def test_default_values_valid(self):
        """
        Invariante: Valores por defecto deben ser válidos.
        """
        config = EmitterConfig()

        assert config.redis.host == "localhost"
        assert config.redis.port == 6379
        assert config.redis.password is None
        assert config.emitter.key == "socket.io"
        assert config.emitter.force_binary == False
        assert config.emitter.on_publish_error == "collect"
        assert config.logging.level == "INFO"


@pytest.mark.unit
@pytest.mark.config
class TestEmitterSettingsValidation:
    """Tests de validación de EmitterSettings"""

    def test_key_must_not_contain_separator(self):
        """
        Invariante: la key no puede contener "#" (rompería el parseo de canales).
        """
        with pytest.raises(ValidationError) as exc_info:
            EmitterSettings(key="bad#key")

        assert "#" in str(exc_info.value)

    def test_key_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            EmitterSettings(key="")

    def test_on_publish_error_literal(self):
        assert EmitterSettings(on_publish_error="raise").on_publish_error == "raise"

        with pytest.raises(ValidationError):
            EmitterSettings(on_publish_error="ignore")


@pytest.mark.unit
@pytest.mark.config
class TestRangeValidation:
    """Tests de rangos"""

    def test_port_range(self):
        with pytest.raises(ValidationError):
            RedisSettings(port=0)

        with pytest.raises(ValidationError):
            RedisSettings(port=70000)

    def test_db_non_negative(self):
        with pytest.raises(ValidationError):
            RedisSettings(db=-1)

    def test_json_indent_range(self):
        with pytest.raises(ValidationError):
            LoggingSettings(json_indent=8)


@pytest.mark.unit
@pytest.mark.config
class TestYamlLoading:
    """Tests de carga YAML + entorno"""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            EmitterConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_load_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "redis:\n"
            "  host: redis.internal\n"
            "  port: 6380\n"
            "emitter:\n"
            "  key: myapp\n"
            "  on_publish_error: raise\n"
        )

        config = EmitterConfig.from_yaml(str(config_file))

        assert config.redis.host == "redis.internal"
        assert config.redis.port == 6380
        assert config.emitter.key == "myapp"
        assert config.emitter.on_publish_error == "raise"

    def test_empty_yaml_uses_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert EmitterConfig.from_yaml(str(config_file)) == EmitterConfig()

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """
        Propiedad: REDIS_* pisa al YAML (secretos fuera del archivo).
        """
        config_file = tmp_path / "config.yaml"
        config_file.write_text("redis:\n  host: from-yaml\n  port: 6380\n")
        monkeypatch.setenv("REDIS_HOST", "from-env")
        monkeypatch.setenv("REDIS_PASSWORD", "secret")

        config = EmitterConfig.from_yaml(str(config_file))

        assert config.redis.host == "from-env"
        assert config.redis.port == 6380
        assert config.redis.password == "secret"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("REDIS_PORT", "6390")

        config = EmitterConfig.from_env()

        assert config.redis.port == 6390
        assert config.redis.host == "localhost"
