"""
sio_emitter Test Suite
======================

Property-based tests for critical invariants.

Philosophy:
- Focus on invariants (properties that must always be true)
- Test critical paths (targeting reset, channel routing, wire format)
- Redis reemplazado por un pool fake en memoria

Modules:
- test_targeting: estado del builder
- test_packet: composer + detección binaria
- test_routing: nombres de canales
- test_codec: contrato de wire msgpack
- test_emitter: orquestación end-to-end
- test_pool: RedisChannelPool sobre cliente mock
- test_config_validation: schemas Pydantic
- test_cli: CLI (dry-run, errores)
"""
