"""
Channel Router
==============

Deriva los canales Redis a partir de key prefix, namespace y rooms.

Convención de nombres (la misma que parsea el adapter del servidor):
    <key>#<nsp>#           broadcast a todo el namespace
    <key>#<nsp>#<room>#    un canal por room

Funciones puras, sin I/O.
"""
from typing import Iterable, List

SEPARATOR = "#"
DEFAULT_KEY = "socket.io"


def base_channel(key: str, nsp: str) -> str:
    """Canal base del namespace: `<key>#<nsp>#`"""
    return f"{key}{SEPARATOR}{nsp}{SEPARATOR}"


def room_channel(key: str, nsp: str, room: str) -> str:
    """Canal de una room: `<key>#<nsp>#<room>#`"""
    return f"{base_channel(key, nsp)}{room}{SEPARATOR}"


def route(key: str, nsp: str, rooms: Iterable[str]) -> List[str]:
    """
    Calcula los canales a publicar.

    Args:
        key: Key prefix del emitter
        nsp: Namespace del packet
        rooms: Rooms del emit (vacío = broadcast al namespace)

    Returns:
        Lista con al menos un canal. Con rooms, exactamente un canal por room.
    """
    rooms = list(rooms)
    if not rooms:
        return [base_channel(key, nsp)]

    return [room_channel(key, nsp, room) for room in rooms]
