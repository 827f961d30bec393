#!/usr/bin/env python3
"""
CLI para emitir eventos socket.io vía Redis
===========================================

Uso:
    python -m sio_emitter "broadcast event" "Hello from sio_emitter"
    python -m sio_emitter chat hi --room test --room lobby
    python -m sio_emitter alert '{"level": "high"}' --namespace /nsp --json
    python -m sio_emitter chat hi --room test --dry-run
"""
import sys
import json
import argparse
from typing import Any, List, Optional

from .codec import decode_envelope, encode_envelope
from .config import EmitterConfig
from .emitter import Emitter
from .errors import EmitterError
from .logging import get_component_logger, setup_logging
from .publishers import PacketComposer
from .routing import route
from .targeting import TargetingState

logger = get_component_logger("cli")


def parse_args_values(values: List[str], as_json: bool) -> List[Any]:
    """Convierte los argumentos del evento (strings, o JSON con --json)."""
    if not as_json:
        return list(values)
    return [json.loads(value) for value in values]


def dry_run(config: EmitterConfig, rooms: List[str], namespace: Optional[str], args: List[Any]) -> bool:
    """Muestra canales y envelope sin conectar a Redis."""
    state = TargetingState()
    if namespace is not None:
        state.set_namespace(namespace)
    for room in rooms:
        state.add_room(room)

    snapshot = state.snapshot()
    composer = PacketComposer(force_binary=config.emitter.force_binary)
    packet, extras = composer.compose(snapshot, snapshot.rooms, args)
    payload = encode_envelope(packet, extras)

    print("🧪 Dry run (sin conexión a Redis)")
    for channel in route(config.emitter.key, packet.nsp, extras.rooms):
        print(f"📡 {channel}")
    print(f"📦 {json.dumps(decode_envelope(payload), default=repr)} ({len(payload)} bytes)")
    return True


def send_event(config: EmitterConfig, rooms: List[str], namespace: Optional[str], args: List[Any]) -> bool:
    """Emite el evento y reporta resultado por canal."""
    print(f"🔌 Conectando a {config.redis.host}:{config.redis.port}...")

    with Emitter.from_config(config) as emitter:
        if namespace is not None:
            emitter.of(namespace)
        for room in rooms:
            emitter.in_(room)

        try:
            result = emitter.emit(*args)
        except EmitterError as e:
            print(f"❌ Error emitiendo: {e}")
            return False

    for outcome in result.outcomes:
        if outcome.ok:
            print(f"✅ {outcome.channel} ({outcome.receivers} receptores)")
        else:
            print(f"❌ {outcome.channel}: {outcome.error}")

    return result.ok


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sio-emitter",
        description="Emite eventos socket.io publicando directo en Redis"
    )
    parser.add_argument("event", help="Nombre del evento")
    parser.add_argument("args", nargs="*", help="Argumentos del evento")
    parser.add_argument(
        "--room",
        action="append",
        default=[],
        help="Room destino (repetible; sin rooms = broadcast al namespace)"
    )
    parser.add_argument("--namespace", default=None, help="Namespace (default: /)")
    parser.add_argument("--key", default=None, help="Key prefix (default: socket.io)")
    parser.add_argument("--host", default=None, help="Redis host (default: config o localhost)")
    parser.add_argument("--port", type=int, default=None, help="Redis port (default: 6379)")
    parser.add_argument("--password", default=None, help="Redis password")
    parser.add_argument("--config", default=None, help="YAML de configuración")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Parsear cada argumento como JSON"
    )
    parser.add_argument(
        "--force-binary",
        action="store_true",
        help="Marcar el packet como BINARY_EVENT (legacy)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Mostrar canales y envelope sin publicar"
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: config)")
    return parser


def load_config(options: argparse.Namespace) -> EmitterConfig:
    """Config desde YAML/entorno, con overrides de línea de comandos."""
    config = EmitterConfig.from_yaml(options.config) if options.config else EmitterConfig.from_env()

    redis_overrides = {
        name: value
        for name, value in (
            ("host", options.host),
            ("port", options.port),
            ("password", options.password),
        )
        if value is not None
    }
    emitter_overrides = {}
    if options.key is not None:
        emitter_overrides["key"] = options.key
    if options.force_binary:
        emitter_overrides["force_binary"] = True

    return EmitterConfig(
        redis={**config.redis.model_dump(), **redis_overrides},
        emitter={**config.emitter.model_dump(), **emitter_overrides},
        logging=config.logging,
    )


def main(argv: Optional[List[str]] = None) -> int:
    options = build_parser().parse_args(argv)

    try:
        config = load_config(options)
        args = [options.event] + parse_args_values(options.args, options.json)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Configuración inválida: {e}")
        return 2

    setup_logging(
        level=options.log_level or config.logging.level,
        indent=config.logging.json_indent,
        log_file=config.logging.file,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        redis_level=config.logging.redis_level,
    )
    logger.debug("CLI args parsed", extra={"component": "cli", "event": "args_parsed"})

    try:
        if options.dry_run:
            success = dry_run(config, options.room, options.namespace, args)
        else:
            success = send_event(config, options.room, options.namespace, args)
    except EmitterError as e:
        print(f"❌ Error: {e}")
        success = False

    return 0 if success else 1


def main_entry() -> None:
    """Console script `sio-emitter`."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
