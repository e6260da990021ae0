"""
ConnectLTV Common Module

Shared infrastructure for search, enrichment and the outer surfaces.
"""

from .config import ConnectConfig, ConfigError, load_config
from .record_store import RecordStore, RecordStoreError, RetrievalError, RecordNotFound
from .memory_store import InMemoryRecordStore
from .postgrest_client import PostgrestRecordStore
from .store_factory import build_record_store

__all__ = [
    "ConnectConfig",
    "ConfigError",
    "load_config",
    "RecordStore",
    "RecordStoreError",
    "RetrievalError",
    "RecordNotFound",
    "InMemoryRecordStore",
    "PostgrestRecordStore",
    "build_record_store",
]
