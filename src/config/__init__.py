"""
Configuration loader.

App config: reads config.yaml into a frozen dataclass tree.
"""

from config.loader import (
    AlertingConfig,
    AppConfig,
    DataConfig,
    EngineConfig,
    JournalConfig,
    load_config,
)

__all__ = [
    "AlertingConfig",
    "AppConfig",
    "DataConfig",
    "EngineConfig",
    "JournalConfig",
    "load_config",
]
