"""
Wire Codec
==========

Serialización msgpack del envelope `[uid, packet, extras]`.

Contrato de wire (compatible con socket.io-redis adapter):
- uid: "emitter" (identifica al productor)
- packet: {"type": 2|5, "data": [...], "nsp": "/..."}
- extras: {"rooms": [...], "flags": {...}}
"""
from typing import TYPE_CHECKING, Any, List

import msgpack

from .errors import EncodingError

if TYPE_CHECKING:
    from .publishers.packet import Extras, Packet

UID = "emitter"

# Tipos de packet socket.io
EVENT = 2
BINARY_EVENT = 5


def encode_envelope(packet: "Packet", extras: "Extras") -> bytes:
    """
    Serializa el envelope completo.

    Raises:
        EncodingError: Si algún argumento no es serializable por msgpack
    """
    envelope = [UID, packet.to_wire(), extras.to_wire()]
    try:
        return msgpack.packb(envelope, use_bin_type=True)
    except (TypeError, ValueError, OverflowError, RecursionError) as e:
        raise EncodingError(f"Cannot encode envelope: {e}") from e


def decode_envelope(payload: bytes) -> List[Any]:
    """Deserializa un payload publicado (debug, dry-run, tests)."""
    return msgpack.unpackb(payload, raw=False)
