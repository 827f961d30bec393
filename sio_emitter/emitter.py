"""
Socket.IO Redis Emitter
=======================

Publica eventos en el fabric pub/sub de un servidor socket.io (redis adapter)
sin mantener conexión socket.io: escribe directo en los canales Redis.

Diseño:
- TargetingState = estado del builder (rooms, namespace, flags)
- PacketComposer = lógica de negocio (formato del packet)
- routing / codec = funciones puras (canales, msgpack)
- ChannelPool = infraestructura Redis
- Emitter = orquestador: compose → encode → route → publish → reset

Fire-and-forget: no hay garantía de entrega. Cada canal se publica de forma
independiente; un canal caído no impide intentar los demás.

Usage:
    emitter = Emitter(host="127.0.0.1", port=6379)

    emitter.emit("broadcast event", "hello")
    emitter.in_("room1").to("room2").emit("chat", {"text": "hi"})
    emitter.of("/admin").emit("alert", "disk full")
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from .codec import encode_envelope
from .errors import ConfigurationError, PublishError
from .logging import (
    trace_context,
    generate_trace_id,
    log_redis_publish,
    log_emit_summary,
    log_error_with_context,
)
from .pool import ChannelPool, RedisChannelPool
from .publishers import PacketComposer
from .routing import DEFAULT_KEY, route
from .targeting import TargetingState

logger = logging.getLogger(__name__)

ERROR_POLICIES = ("collect", "raise")


@dataclass(frozen=True)
class ChannelOutcome:
    """Resultado de publicar en un canal."""
    channel: str
    receivers: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class EmitResult:
    """
    Resultado agregado de un emit.

    Truthy solo si todos los canales se publicaron, así que
    `if emitter.emit(...)` sigue funcionando como un bool.
    """
    outcomes: Tuple[ChannelOutcome, ...] = ()

    @property
    def channels(self) -> List[str]:
        return [outcome.channel for outcome in self.outcomes]

    @property
    def published(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.published

    @property
    def failures(self) -> List[ChannelOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def __bool__(self) -> bool:
        return self.ok


class Emitter:
    """
    Emitter socket.io sobre Redis pub/sub.

    Args:
        pool: ChannelPool compartido (no se cierra con el emitter)
        host: Host Redis; se usa solo si no hay pool
        port: Puerto Redis
        password: Password Redis (AUTH)
        db: Base de datos Redis
        key: Key prefix de los canales (default "socket.io")
        force_binary: Marcar todo packet como BINARY_EVENT (legacy)
        on_publish_error: "collect" devuelve fallos en el EmitResult,
            "raise" lanza PublishError después de intentar todos los canales

    Raises:
        ConfigurationError: Si no hay pool ni host, o la política es inválida
    """

    def __init__(
        self,
        pool: Optional[ChannelPool] = None,
        host: Optional[str] = None,
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        key: Optional[str] = None,
        force_binary: bool = False,
        on_publish_error: str = "collect",
    ):
        if on_publish_error not in ERROR_POLICIES:
            raise ConfigurationError(
                f"on_publish_error must be one of {ERROR_POLICIES}, got {on_publish_error!r}"
            )

        if pool is not None:
            self._pool = pool
            self._owns_pool = False
        else:
            if not host:
                raise ConfigurationError("Missing redis `host`")
            self._pool = RedisChannelPool(host=host, port=port, password=password, db=db)
            self._owns_pool = True

        self.key = key or DEFAULT_KEY
        self.on_publish_error = on_publish_error

        self._state = TargetingState()
        self._composer = PacketComposer(force_binary=force_binary)

    @classmethod
    def from_config(cls, config, pool: Optional[ChannelPool] = None) -> "Emitter":
        """
        Crea un Emitter desde EmitterConfig.

        Args:
            config: EmitterConfig validado
            pool: Pool compartido opcional (ignora config.redis)
        """
        return cls(
            pool=pool,
            host=config.redis.host,
            port=config.redis.port,
            password=config.redis.password,
            db=config.redis.db,
            key=config.emitter.key,
            force_binary=config.emitter.force_binary,
            on_publish_error=config.emitter.on_publish_error,
        )

    # ------------------------------------------------------------------
    # Builder (sin I/O)
    # ------------------------------------------------------------------

    def in_(self, room: str) -> "Emitter":
        """Limita la emisión a una `room`."""
        self._state.add_room(room)
        return self

    def to(self, room: str) -> "Emitter":
        """Alias de in_()."""
        return self.in_(room)

    def of(self, nsp: str) -> "Emitter":
        """Limita la emisión a un `namespace`."""
        self._state.set_namespace(nsp)
        return self

    def flag(self, name: str, value: str) -> "Emitter":
        """Agrega un flag a extras.flags (ej: flag("volatile", "true"))."""
        self._state.set_flag(name, value)
        return self

    @property
    def targeting(self) -> TargetingState:
        return self._state

    @property
    def composer(self) -> PacketComposer:
        return self._composer

    # ------------------------------------------------------------------
    # Emit
    # ------------------------------------------------------------------

    def emit(self, *args: Any) -> EmitResult:
        """
        Publica el evento en las rooms seleccionadas (o todo el namespace).

        Args:
            *args: Nombre del evento seguido de sus argumentos

        Returns:
            EmitResult (truthy si todos los canales se publicaron)
        """
        rooms = list(self._state.rooms)
        return self.emit_to(rooms, *args)

    def emit_to(self, rooms: Iterable[str], *args: Any) -> EmitResult:
        """
        Publica en una lista explícita de rooms, ignorando las del builder.

        Namespace y flags del builder sí se aplican. El targeting se limpia
        al final, incluso si falla el encoding.

        Raises:
            EncodingError: Si msgpack no puede serializar los argumentos
            PublishError: Si algún canal falla y on_publish_error="raise"
            TypeError: Si rooms es bytes

        Note:
            Un str suelto se toma como una sola room.
        """
        if isinstance(rooms, str):
            rooms = [rooms]
        elif isinstance(rooms, (bytes, bytearray)):
            self._state.reset()
            raise TypeError("rooms must be a str or an iterable of str, not bytes")
        rooms = list(rooms)
        with trace_context(generate_trace_id("emit")):
            try:
                snapshot = self._state.snapshot()
                packet, extras = self._composer.compose(snapshot, rooms, args)
                payload = encode_envelope(packet, extras)
                channels = route(self.key, packet.nsp, extras.rooms)

                outcomes = tuple(
                    self._publish(channel, payload) for channel in channels
                )
            finally:
                self._state.reset()

            result = EmitResult(outcomes=outcomes)
            log_emit_summary(
                logger,
                nsp=packet.nsp,
                packet_type=packet.type,
                published=result.published,
                total=len(outcomes),
            )

        if not result and self.on_publish_error == "raise":
            raise PublishError(result)

        return result

    def _publish(self, channel: str, payload: bytes) -> ChannelOutcome:
        """PUBLISH en un canal. Nunca lanza: el error queda en el outcome."""
        try:
            receivers = self._pool.publish(channel, payload)
        except Exception as e:
            log_error_with_context(
                logger,
                message=f"❌ Error publicando en {channel}",
                exception=e,
                component="emitter",
                event="publish_exception",
                redis_channel=channel,
            )
            return ChannelOutcome(channel=channel, error=f"{type(e).__name__}: {e}")

        log_redis_publish(
            logger,
            channel=channel,
            payload_size=len(payload),
            receivers=receivers,
        )
        return ChannelOutcome(channel=channel, receivers=receivers or 0)

    # ------------------------------------------------------------------
    # Lifecycle / debug
    # ------------------------------------------------------------------

    def ping(self) -> bool:
        """Health check del pool."""
        return self._pool.ping()

    def close(self) -> None:
        """Cierra el pool solo si el emitter lo creó."""
        if self._owns_pool:
            self._pool.close()

    def __enter__(self) -> "Emitter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def dump(self) -> None:
        """Loggea key y targeting pendiente (debug)."""
        logger.info(
            "🔍 Emitter state",
            extra={
                "component": "emitter",
                "event": "dump",
                "key": self.key,
                "nsp": self._state.namespace,
                "flags": self._state.flags,
                "rooms": sorted(self._state.rooms),
            }
        )

    def __repr__(self) -> str:
        return f"Emitter(key={self.key!r}, {self._state!r})"
