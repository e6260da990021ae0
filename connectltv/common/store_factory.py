"""
Record store factory.

Picks the store backend named in StoreConfig.
"""

import logging

from .config import StoreConfig, ConfigError
from .memory_store import InMemoryRecordStore
from .postgrest_client import PostgrestRecordStore
from .record_store import RecordStore

logger = logging.getLogger("connectltv.common.store_factory")


def build_record_store(config: StoreConfig, privileged: bool = False) -> RecordStore:
    """
    Create the configured record store.

    Args:
        config: Store section of ConnectConfig
        privileged: Use the service-role key (needed for enrichment writes)

    Raises:
        ConfigError: If the backend is unknown or required settings are missing
    """
    if config.backend == "memory":
        if config.memory_path:
            return InMemoryRecordStore.from_json_file(config.memory_path)
        logger.warning("Memory store configured without memory_path; starting empty")
        return InMemoryRecordStore()

    if config.backend == "postgrest":
        key = config.service_key if privileged else (config.api_key or config.service_key)
        if not config.url or not key:
            raise ConfigError(
                "Missing record store credentials. Set SUPABASE_URL and "
                + ("SUPABASE_SERVICE_ROLE_KEY." if privileged else "SUPABASE_ANON_KEY.")
            )
        return PostgrestRecordStore(
            url=config.url,
            api_key=key,
            table=config.table,
            timeout=config.timeout_seconds,
        )

    raise ConfigError(f"Unknown store backend '{config.backend}'")
