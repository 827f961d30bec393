"""
CLI Tests
=========

Invariantes testeadas:
1. --dry-run muestra canales sin conectar
2. Exit code 0 solo si todos los canales publicaron
3. Argumentos inválidos → exit code 2
"""
import pytest
from sio_emitter import cli
from sio_emitter.emitter import Emitter

from .conftest import FakePool


@pytest.fixture(autouse=True)
def isolate_cli(monkeypatch):
    """Sin logging global ni entorno REDIS_* durante los tests del CLI."""
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr("sio_emitter.config.schemas.load_dotenv", lambda: False)
    for name in ("REDIS_HOST", "REDIS_PORT", "REDIS_PASSWORD", "REDIS_DB"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_pool(monkeypatch):
    fake = FakePool()

    def from_config(config, pool=None):
        return Emitter(pool=fake, key=config.emitter.key)

    monkeypatch.setattr(cli.Emitter, "from_config", staticmethod(from_config))
    return fake


@pytest.mark.unit
class TestCli:
    """Tests del CLI"""

    def test_dry_run_prints_channels(self, capsys):
        code = cli.main(["chat", "hi", "--room", "r1", "--namespace", "/nsp", "--dry-run"])

        out = capsys.readouterr().out
        assert code == 0
        assert "socket.io#/nsp#r1#" in out
        assert '"nsp": "/nsp"' in out

    def test_json_arguments(self):
        assert cli.parse_args_values(['{"k": "v"}', "42"], as_json=True) == [{"k": "v"}, 42]
        assert cli.parse_args_values(["42"], as_json=False) == ["42"]

    def test_invalid_json_exit_code(self):
        assert cli.main(["evt", "{not json", "--json", "--dry-run"]) == 2

    def test_invalid_key_exit_code(self):
        assert cli.main(["evt", "--key", "bad#key", "--dry-run"]) == 2

    def test_missing_config_exit_code(self, tmp_path):
        assert cli.main(["evt", "--config", str(tmp_path / "nope.yaml")]) == 2


@pytest.mark.integration
class TestCliEmit:
    """Tests CLI → config → Emitter → pool"""

    def test_emit_broadcast(self, fake_pool):
        code = cli.main(["broadcast event", "Hello"])

        assert code == 0
        assert fake_pool.channels == ["socket.io#/#"]

    def test_emit_rooms_and_key(self, fake_pool):
        code = cli.main(["chat", "hi", "--room", "a", "--room", "b", "--key", "myapp"])

        assert code == 0
        assert sorted(fake_pool.channels) == ["myapp#/#a#", "myapp#/#b#"]

    def test_failed_channel_exit_code(self, fake_pool, capsys):
        fake_pool.failing.add("socket.io#/#")

        code = cli.main(["evt"])

        assert code == 1
        assert "❌" in capsys.readouterr().out

    def test_repeated_room_published_once(self, fake_pool):
        """
        Invariante: --room repetida colapsa igual que in_() (set).
        """
        code = cli.main(["chat", "hi", "--room", "a", "--room", "a"])

        assert code == 0
        assert fake_pool.channels == ["socket.io#/#a#"]

    def test_namespace_and_rooms(self, fake_pool):
        code = cli.main(["chat", "hi", "--room", "a", "--namespace", "/nsp"])

        assert code == 0
        assert fake_pool.channels == ["socket.io#/nsp#a#"]
