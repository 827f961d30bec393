"""
Publishers
==========

Formateo de mensajes socket.io (packet + extras).

Responsabilidad:
- Conocen la estructura del packet socket.io
- NO conocen Redis (eso es del Emitter / ChannelPool)
"""
from .packet import Extras, Packet, PacketComposer, has_binary

__all__ = ['Extras', 'Packet', 'PacketComposer', 'has_binary']
