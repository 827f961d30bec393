"""
Configuration Module
====================

Provides configuration loading with Pydantic validation.

Usage:
    from sio_emitter.config import EmitterConfig
    config = EmitterConfig.from_yaml("config/sio_emitter/config.yaml")
"""
from .schemas import (
    EmitterConfig,
    EmitterSettings,
    RedisSettings,
    RedisEnvSettings,
    LoggingSettings,
)

__all__ = [
    'EmitterConfig',
    'EmitterSettings',
    'RedisSettings',
    'RedisEnvSettings',
    'LoggingSettings',
]
