"""
Channel Pool
============

Pool de conexiones Redis para PUBLISH.

Responsabilidad: Infraestructura Redis
- Adquiere/libera una conexión por PUBLISH (redis-py lo hace por llamada)
- Techo de conexiones activas: bloquea al adquirir si está lleno
- Health check (PING) antes de reusar conexiones ociosas
- NO conoce packets ni canales socket.io (eso es del Emitter)

El Emitter solo depende del protocolo ChannelPool, así que en tests
se reemplaza por un pool fake en memoria.
"""
import logging
from typing import Optional, Protocol

import redis

logger = logging.getLogger(__name__)

POOL_MAX_ACTIVE = 12000
HEALTH_CHECK_INTERVAL = 1  # segundos ocioso antes de PING


class ChannelPool(Protocol):
    """Interfaz mínima que el Emitter necesita del transporte."""

    def publish(self, channel: str, payload: bytes) -> int:
        """Publica payload; retorna receptores. Lanza excepción si falla."""
        ...

    def ping(self) -> bool:
        ...

    def close(self) -> None:
        ...


class RedisChannelPool:
    """
    ChannelPool sobre redis-py con BlockingConnectionPool.

    Usage:
        # Pool propio
        pool = RedisChannelPool(host="127.0.0.1", port=6379, password="secret")

        # Cliente compartido (no se cierra al cerrar el pool)
        pool = RedisChannelPool.from_client(redis.Redis(host="127.0.0.1"))

        pool.publish("socket.io#/#", payload)
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        max_connections: int = POOL_MAX_ACTIVE,
        acquire_timeout: Optional[float] = None,
        client: Optional[redis.Redis] = None,
    ):
        if client is not None:
            self._client = client
            self._owns_pool = False
        else:
            connection_pool = redis.BlockingConnectionPool(
                max_connections=max_connections,
                timeout=acquire_timeout,
                host=host,
                port=port,
                password=password or None,
                db=db,
                health_check_interval=HEALTH_CHECK_INTERVAL,
            )
            self._client = redis.Redis(connection_pool=connection_pool)
            self._owns_pool = True

            logger.info(
                "🔌 Redis pool creado",
                extra={
                    "component": "channel_pool",
                    "event": "pool_created",
                    "redis_host": host,
                    "redis_port": port,
                    "redis_db": db,
                    "max_connections": max_connections,
                }
            )

    @classmethod
    def from_client(cls, client: redis.Redis) -> "RedisChannelPool":
        """Envuelve un cliente Redis existente (handle compartido, no propio)."""
        return cls(client=client)

    @property
    def client(self) -> redis.Redis:
        return self._client

    def publish(self, channel: str, payload: bytes) -> int:
        return self._client.publish(channel, payload)

    def ping(self) -> bool:
        """Health check del backend. Nunca lanza."""
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning(
                "⚠️ Redis no responde a PING",
                extra={
                    "component": "channel_pool",
                    "event": "ping_failed",
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            return False

    def close(self) -> None:
        """Desconecta el pool solo si este objeto lo creó."""
        if self._owns_pool:
            self._client.connection_pool.disconnect()
            logger.info(
                "🔌 Redis pool cerrado",
                extra={"component": "channel_pool", "event": "pool_closed"}
            )
