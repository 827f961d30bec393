"""
Packet Composer
===============

Construye Packet + Extras a partir del targeting y los argumentos del emit.

Responsabilidad:
- Tipo de packet (event / binary event)
- Namespace efectivo (default "/")
- Rooms y flags de routing (extras)

Diseño: transformación pura, sin I/O. El único estado es el contador
de mensajes compuestos.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Sequence, Set, Tuple

from ..codec import BINARY_EVENT, EVENT
from ..targeting import TargetingSnapshot

DEFAULT_NAMESPACE = "/"

_BINARY_TYPES = (bytes, bytearray, memoryview)


def has_binary(value: Any, _seen: Optional[Set[int]] = None) -> bool:
    """
    Detecta payload binario en cualquier nivel de anidamiento.

    Recorre listas, tuplas y dicts (keys y values). Los contenedores ya
    visitados se saltean, así que una estructura cíclica no recursa sin fin
    (el codec la rechaza después con EncodingError).
    """
    if isinstance(value, _BINARY_TYPES):
        return True
    if not isinstance(value, (list, tuple, dict)):
        return False

    if _seen is None:
        _seen = set()
    if id(value) in _seen:
        return False
    _seen.add(id(value))

    if isinstance(value, dict):
        return any(
            has_binary(k, _seen) or has_binary(v, _seen) for k, v in value.items()
        )
    return any(has_binary(item, _seen) for item in value)


@dataclass(frozen=True)
class Packet:
    """Packet socket.io"""
    type: int
    data: Tuple[Any, ...]
    nsp: str = DEFAULT_NAMESPACE

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "data": list(self.data),
            "nsp": self.nsp,
        }


@dataclass(frozen=True)
class Extras:
    """Metadata de routing que acompaña al packet"""
    rooms: Tuple[str, ...] = ()
    flags: Dict[str, str] = field(default_factory=dict)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "rooms": list(self.rooms),
            "flags": dict(self.flags),
        }


class PacketComposer:
    """
    Composer de packets socket.io.

    Args:
        force_binary: Si True, todo packet sale como BINARY_EVENT (5).
            Reproduce el comportamiento legacy para consumidores que
            dependen de él. Default: detección real de binarios.
    """

    def __init__(self, force_binary: bool = False):
        self.force_binary = force_binary
        self._message_count = 0

    def compose(
        self,
        snapshot: TargetingSnapshot,
        rooms: Iterable[str],
        args: Sequence[Any],
    ) -> Tuple[Packet, Extras]:
        """
        Compone packet y extras.

        Args:
            snapshot: Targeting capturado al momento del emit
            rooms: Rooms efectivas del emit (ya resueltas por el Emitter)
            args: Argumentos del emit, en orden (evento + payload)

        Returns:
            (Packet, Extras)
        """
        packet = Packet(
            type=self.packet_type(args),
            data=tuple(args),
            nsp=self._namespace(snapshot.namespace),
        )
        extras = Extras(rooms=tuple(rooms), flags=dict(snapshot.flags))

        self._message_count += 1
        return packet, extras

    def packet_type(self, args: Sequence[Any]) -> int:
        if self.force_binary or has_binary(list(args)):
            return BINARY_EVENT
        return EVENT

    @staticmethod
    def _namespace(namespace: Optional[str]) -> str:
        return namespace if namespace is not None else DEFAULT_NAMESPACE

    @property
    def message_count(self) -> int:
        """Retorna contador de packets compuestos."""
        return self._message_count
