"""
Structured Logging Infrastructure
==================================

Logging JSON-based para queryability en producción.

Design Philosophy:
- Solo JSON (no dual output)
- Trace correlation vía contextvars (un trace_id por emit)
- Helpers para casos comunes (publish Redis, resumen de emit, errores)
- File rotation automático (RotatingFileHandler)

Usage:
    from sio_emitter.logging import setup_logging

    # Stdout (desarrollo)
    setup_logging(level="INFO")

    # File con rotation (producción)
    setup_logging(
        level="INFO",
        log_file="logs/sio_emitter.log",
        max_bytes=10*1024*1024,  # 10 MB
        backup_count=5
    )

    # Con trace propagation
    from sio_emitter.logging import trace_context, get_trace_id

    with trace_context(generate_trace_id("emit")):
        logger.info("Publicando", extra={"trace_id": get_trace_id()})
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional, Dict, Any
import uuid

# ============================================================================
# Trace Context (propagación de trace_id)
# ============================================================================

trace_id_var: ContextVar[Optional[str]] = ContextVar('trace_id', default=None)


def get_trace_id() -> Optional[str]:
    """Obtiene el trace_id actual del contexto (o None)."""
    return trace_id_var.get()


def generate_trace_id(prefix: str = "trace") -> str:
    """
    Genera un nuevo trace ID único.

    Args:
        prefix: Prefijo para el trace ID (ej: "emit", "cli")

    Returns:
        Trace ID en formato: {prefix}-{short_uuid}
    """
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@contextmanager
def trace_context(trace_id: Optional[str] = None):
    """
    Context manager para propagar trace_id en toda la call stack.

    Args:
        trace_id: ID de trace a propagar. Si None, genera uno automático.
    """
    if trace_id is None:
        trace_id = generate_trace_id()

    token = trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        trace_id_var.reset(token)


# ============================================================================
# Logger Setup
# ============================================================================

def setup_logging(
    level: str = "INFO",
    indent: Optional[int] = None,
    add_fields: Optional[Dict[str, Any]] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    redis_level: str = "WARNING",
) -> None:
    """
    Configura structured logging (JSON) para toda la aplicación.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        indent: JSON indent para pretty-print (None = compact, 2 = readable)
        add_fields: Campos adicionales globales (ej: {"environment": "production"})
        log_file: Path al archivo de logs (None = stdout). Si se especifica, usa rotation.
        max_bytes: Tamaño máximo por archivo antes de rotar (default 10 MB)
        backup_count: Número de archivos backup a mantener (default 5)
        redis_level: Log level del logger de redis-py
    """
    try:
        from pythonjsonlogger import jsonlogger
    except ImportError:
        raise ImportError(
            "pythonjsonlogger no encontrado. Instalar con: pip install python-json-logger"
        )

    class CustomJsonFormatter(jsonlogger.JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super().add_fields(log_record, record, message_dict)

            if 'levelname' in log_record:
                log_record['level'] = log_record.pop('levelname')

            if 'name' in log_record:
                log_record['logger'] = log_record.pop('name')

            current_trace_id = get_trace_id()
            if current_trace_id and 'trace_id' not in log_record:
                log_record['trace_id'] = current_trace_id

            if add_fields:
                for key, value in add_fields.items():
                    if key not in log_record:
                        log_record[key] = value

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        print(f"📄 Logging to file: {log_file} (max: {max_bytes//1024//1024}MB, backups: {backup_count})", file=sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stdout)

    formatter = CustomJsonFormatter(
        '%(timestamp)s %(level)s %(logger)s %(message)s',
        timestamp=True,
        json_indent=indent
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    logging.getLogger("redis").setLevel(getattr(logging, redis_level.upper()))


# ============================================================================
# Helper Functions
# ============================================================================

def log_redis_publish(
    logger: logging.Logger,
    channel: str,
    payload_size: int,
    receivers: Optional[int] = None,
    component: str = "emitter",
) -> None:
    """
    Helper para logs de PUBLISH exitoso a Redis.

    Los fallos van por log_error_with_context (con excepción y trace_id).

    Args:
        logger: Logger instance
        channel: Canal Redis
        payload_size: Tamaño del payload en bytes
        receivers: Suscriptores que recibieron el mensaje (respuesta de PUBLISH)
        component: Componente que genera el log
    """
    extra = {
        "component": component,
        "event": "published",
        "redis_channel": channel,
        "payload_size_bytes": payload_size,
    }

    if receivers is not None:
        extra["receivers"] = receivers

    logger.debug(f"📤 Mensaje publicado a {channel}", extra=extra)


def log_emit_summary(
    logger: logging.Logger,
    nsp: str,
    packet_type: int,
    published: int,
    total: int,
    component: str = "emitter",
) -> None:
    """
    Helper para el resumen de un emit (N de M canales).

    Args:
        logger: Logger instance
        nsp: Namespace del packet
        packet_type: Tipo de packet socket.io (2 o 5)
        published: Canales publicados con éxito
        total: Canales intentados
    """
    extra = {
        "component": component,
        "event": "emit_completed",
        "nsp": nsp,
        "packet_type": packet_type,
        "channels_published": published,
        "channels_total": total,
    }

    if published == total:
        logger.debug(f"✅ Emit publicado en {published}/{total} canales", extra=extra)
    else:
        logger.warning(f"⚠️ Emit parcial: {published}/{total} canales", extra=extra)


def log_error_with_context(
    logger: logging.Logger,
    message: str,
    exception: Optional[Exception] = None,
    component: str = "unknown",
    event: Optional[str] = None,
    trace_id: Optional[str] = None,
    **kwargs: Any
) -> None:
    """
    Helper para logs de errores con contexto completo.

    Args:
        logger: Logger instance
        message: Mensaje de error
        exception: Excepción capturada (opcional)
        component: Componente donde ocurrió el error
        event: Evento que causó el error
        trace_id: Trace ID (usa contexto si no se especifica)
        **kwargs: Contexto adicional (redis_channel, nsp, etc.)
    """
    extra = {
        "component": component,
        "trace_id": trace_id or get_trace_id()
    }

    if event:
        extra["event"] = event

    if exception:
        extra["error_type"] = type(exception).__name__
        extra["error_message"] = str(exception)

    extra.update(kwargs)

    if exception:
        logger.error(f"{message}: {exception}", extra=extra, exc_info=True)
    else:
        logger.error(message, extra=extra)


def get_component_logger(component: str) -> logging.Logger:
    """Logger con namespace `sio_emitter.<component>`."""
    return logging.getLogger(f"sio_emitter.{component}")


__all__ = [
    # Setup
    "setup_logging",
    # Trace context
    "trace_context",
    "get_trace_id",
    "generate_trace_id",
    # Helpers
    "log_redis_publish",
    "log_emit_summary",
    "log_error_with_context",
    # Component loggers
    "get_component_logger",
]
