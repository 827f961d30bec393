"""
Emitter Errors
==============

Jerarquía de excepciones del emitter.

- ConfigurationError: falta destino Redis al construir (fatal)
- EncodingError: msgpack rechaza el envelope (fatal para el emit actual)
- PublishError: uno o más canales fallaron (solo con on_publish_error="raise")
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .emitter import EmitResult


class EmitterError(Exception):
    """Error base del emitter."""
    pass


class ConfigurationError(EmitterError):
    """Falta pool o host de Redis: no existe emitter parcialmente construido."""
    pass


class EncodingError(EmitterError):
    """El codec no pudo serializar el envelope (argumento no soportado)."""
    pass


class PublishError(EmitterError):
    """
    Uno o más canales no recibieron el mensaje.

    Se lanza DESPUÉS de intentar todos los canales; `result` tiene el
    detalle por canal.
    """

    def __init__(self, result: "EmitResult"):
        self.result = result
        failed = ', '.join(outcome.channel for outcome in result.failures)
        super().__init__(
            f"Published to {result.published} of {len(result.outcomes)} channels. "
            f"Failed channels: {failed}"
        )
