"""
Targeting State
===============

Estado mutable del builder entre llamadas `in_/to/of` y el emit que lo consume.

Diseño:
- Namespace como campo explícito (no más flag "nsp" en un dict abierto)
- Flags extensibles en contenedor aparte (se serializan en extras.flags)
- snapshot() inmutable para componer; reset() se llama UNA vez al final del emit

No es thread-safe: un emitter por hilo, o sincronización externa.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Set, Tuple

NAMESPACE_FLAG = "nsp"


@dataclass(frozen=True)
class TargetingSnapshot:
    """Copia inmutable del targeting al momento del emit."""
    rooms: Tuple[str, ...] = ()
    namespace: Optional[str] = None
    flags: Dict[str, str] = field(default_factory=dict)


class TargetingState:
    """
    Rooms, namespace y flags acumulados por el builder.

    Usage:
        state = TargetingState()
        state.add_room("r1")
        state.set_namespace("/chat")

        snapshot = state.snapshot()
        state.reset()
    """

    def __init__(self):
        self._rooms: Set[str] = set()
        self._namespace: Optional[str] = None
        self._flags: Dict[str, str] = {}

    def add_room(self, room: str) -> None:
        """Agrega room (idempotente)."""
        self._rooms.add(room)

    def set_namespace(self, nsp: str) -> None:
        """Selecciona namespace, sobrescribe el anterior."""
        self._namespace = nsp

    def set_flag(self, name: str, value: str) -> None:
        """
        Setea un flag extra.

        Note:
            "nsp" se redirige al namespace, nunca queda en flags.
        """
        if name == NAMESPACE_FLAG:
            self.set_namespace(value)
            return
        self._flags[name] = value

    @property
    def rooms(self) -> Set[str]:
        return set(self._rooms)

    @property
    def namespace(self) -> Optional[str]:
        return self._namespace

    @property
    def flags(self) -> Dict[str, str]:
        return dict(self._flags)

    @property
    def is_empty(self) -> bool:
        """True si no hay targeting pendiente."""
        return not self._rooms and self._namespace is None and not self._flags

    def snapshot(self) -> TargetingSnapshot:
        return TargetingSnapshot(
            rooms=tuple(self._rooms),
            namespace=self._namespace,
            flags=dict(self._flags),
        )

    def reset(self) -> None:
        """Limpia rooms, namespace y flags."""
        self._rooms = set()
        self._namespace = None
        self._flags = {}

    def __repr__(self) -> str:
        rooms = ', '.join(sorted(self._rooms))
        return (
            f"TargetingState(rooms=[{rooms}], namespace={self._namespace!r}, "
            f"flags={self._flags!r})"
        )
