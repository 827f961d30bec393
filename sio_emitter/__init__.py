"""
sio_emitter - Socket.IO Redis Emitter
=====================================

Publica eventos para clientes de un servidor socket.io (redis adapter)
desde procesos backend, escribiendo directo en Redis pub/sub.

Public API:
- Emitter: Builder + orquestador (in_/to/of → emit/emit_to)
- EmitResult / ChannelOutcome: Resultado por canal
- RedisChannelPool: Pool de conexiones Redis
- EmitterConfig: Configuración (YAML + entorno)

Usage:
    from sio_emitter import Emitter

    emitter = Emitter(host="127.0.0.1", key="socket.io")
    emitter.emit("broadcast event", "Hello")
    emitter.in_("test").emit("broadcast event", "Hello room")
    emitter.of("/nsp").emit("broadcast event", "Hello namespace")
"""

__version__ = "1.0.0"

from .config import EmitterConfig
from .emitter import ChannelOutcome, EmitResult, Emitter
from .errors import ConfigurationError, EmitterError, EncodingError, PublishError
from .pool import ChannelPool, RedisChannelPool

__all__ = [
    # Config
    "EmitterConfig",
    # Emitter
    "Emitter",
    "EmitResult",
    "ChannelOutcome",
    # Pool
    "ChannelPool",
    "RedisChannelPool",
    # Errors
    "EmitterError",
    "ConfigurationError",
    "EncodingError",
    "PublishError",
]
