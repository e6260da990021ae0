"""
Configuration Management for ConnectLTV

Loads configuration from ~/.connectltv/config.json and environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger("connectltv.common.config")

# Default config paths
CONFIG_DIR = Path.home() / ".connectltv"
CONFIG_PATH = CONFIG_DIR / "config.json"

EMPTY_QUERY_POLICIES = ("return_none", "return_all")
STORE_BACKENDS = ("postgrest", "memory")

DEFAULT_FIELD_WEIGHTS: Dict[str, float] = {
    "name": 10,
    "position": 7,
    "company": 7,
    "function": 5,
    "stage": 5,
    "comments": 5,
    "location": 3,
}


class ConfigError(ValueError):
    """Raised when a configuration value is out of range or unknown."""
    pass


@dataclass
class StoreConfig:
    """Record store configuration"""
    backend: str = "postgrest"
    url: str = ""
    api_key: str = ""  # anon key, used for search and detail lookups
    service_key: str = ""  # service-role key, required for enrichment writes
    table: str = "LTV Alumni Database"
    timeout_seconds: float = 10.0
    memory_path: str = ""  # JSON rows for the memory backend


@dataclass
class SearchConfig:
    """Search-and-rank configuration"""
    default_limit: int = 10
    max_limit: int = 50
    candidate_pool: int = 50  # over-fetch size when ranking is enabled
    min_term_length: int = 3
    on_empty_query: str = "return_none"  # "return_none" or "return_all"
    ranking_enabled: bool = True
    field_weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS))


@dataclass
class EnrichmentConfig:
    """Biography enrichment job configuration"""
    batch_size: int = 5
    delay_seconds: float = 0.5


@dataclass
class ServerConfig:
    """HTTP server configuration"""
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class ConnectConfig:
    """Main ConnectLTV configuration"""
    store: StoreConfig = field(default_factory=StoreConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    enrichment: EnrichmentConfig = field(default_factory=EnrichmentConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    _env_sourced_keys: set = field(default_factory=set, repr=False)


def _parse_store_config(data: dict) -> StoreConfig:
    """Parse store section from config dict"""
    store_data = data.get("store", {})
    return StoreConfig(
        backend=store_data.get("backend", "postgrest"),
        url=store_data.get("url", ""),
        api_key=store_data.get("api_key", ""),
        service_key=store_data.get("service_key", ""),
        table=store_data.get("table", "LTV Alumni Database"),
        timeout_seconds=store_data.get("timeout_seconds", 10.0),
        memory_path=store_data.get("memory_path", ""),
    )


def _parse_search_config(data: dict) -> SearchConfig:
    """Parse search section from config dict"""
    search_data = data.get("search", {})
    weights = dict(DEFAULT_FIELD_WEIGHTS)
    weights.update(search_data.get("field_weights", {}))
    return SearchConfig(
        default_limit=search_data.get("default_limit", 10),
        max_limit=search_data.get("max_limit", 50),
        candidate_pool=search_data.get("candidate_pool", 50),
        min_term_length=search_data.get("min_term_length", 3),
        on_empty_query=search_data.get("on_empty_query", "return_none"),
        ranking_enabled=search_data.get("ranking_enabled", True),
        field_weights=weights,
    )


def _parse_enrichment_config(data: dict) -> EnrichmentConfig:
    """Parse enrichment section from config dict"""
    enrichment_data = data.get("enrichment", {})
    return EnrichmentConfig(
        batch_size=enrichment_data.get("batch_size", 5),
        delay_seconds=enrichment_data.get("delay_seconds", 0.5),
    )


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server section from config dict"""
    server_data = data.get("server", {})
    return ServerConfig(
        host=server_data.get("host", "0.0.0.0"),
        port=server_data.get("port", 8080),
    )


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


def validate_config(config: ConnectConfig) -> ConnectConfig:
    """
    Check value ranges and enumerations.

    Raises:
        ConfigError: On the first invalid value found
    """
    if config.store.backend not in STORE_BACKENDS:
        raise ConfigError(f"Unknown store backend '{config.store.backend}' (expected one of {STORE_BACKENDS})")
    if config.search.on_empty_query not in EMPTY_QUERY_POLICIES:
        raise ConfigError(
            f"Unknown on_empty_query policy '{config.search.on_empty_query}' "
            f"(expected one of {EMPTY_QUERY_POLICIES})"
        )
    if config.search.default_limit < 1 or config.search.max_limit < config.search.default_limit:
        raise ConfigError("search limits must satisfy 1 <= default_limit <= max_limit")
    if config.search.min_term_length < 1:
        raise ConfigError("min_term_length must be at least 1")
    for name, weight in config.search.field_weights.items():
        if weight < 0:
            raise ConfigError(f"Field weight for '{name}' must not be negative")
    if config.enrichment.batch_size < 1:
        raise ConfigError("enrichment batch_size must be at least 1")
    return config


def load_config() -> ConnectConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (~/.connectltv/config.json)
    3. Default values
    """
    config = ConnectConfig()

    # Load from config file if exists
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH) as f:
                data = json.load(f)

            config.store = _parse_store_config(data)
            config.search = _parse_search_config(data)
            config.enrichment = _parse_enrichment_config(data)
            config.server = _parse_server_config(data)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Failed to load config file %s: %s", CONFIG_PATH, e)

    # Secrets: track which came from the environment so save_config skips them
    _env_secret_map = {
        "SUPABASE_URL": "url",
        "SUPABASE_ANON_KEY": "api_key",
        "SUPABASE_SERVICE_ROLE_KEY": "service_key",
    }
    for env_var, attr in _env_secret_map.items():
        val = os.getenv(env_var)
        if val:
            setattr(config.store, attr, val)
            config._env_sourced_keys.add(attr)

    if os.getenv("CONNECT_STORE_BACKEND"):
        config.store.backend = os.getenv("CONNECT_STORE_BACKEND")
    if os.getenv("CONNECT_TABLE"):
        config.store.table = os.getenv("CONNECT_TABLE")
    if os.getenv("CONNECT_MEMORY_PATH"):
        config.store.memory_path = os.getenv("CONNECT_MEMORY_PATH")

    if os.getenv("CONNECT_SEARCH_LIMIT"):
        config.search.default_limit = int(os.getenv("CONNECT_SEARCH_LIMIT"))
    if os.getenv("CONNECT_MIN_TERM_LENGTH"):
        config.search.min_term_length = int(os.getenv("CONNECT_MIN_TERM_LENGTH"))
    if os.getenv("CONNECT_ON_EMPTY_QUERY"):
        config.search.on_empty_query = os.getenv("CONNECT_ON_EMPTY_QUERY")
    if os.getenv("CONNECT_RANKING_ENABLED"):
        config.search.ranking_enabled = _parse_bool(os.getenv("CONNECT_RANKING_ENABLED"))

    if os.getenv("CONNECT_ENRICH_BATCH_SIZE"):
        config.enrichment.batch_size = int(os.getenv("CONNECT_ENRICH_BATCH_SIZE"))

    if os.getenv("CONNECT_PORT"):
        config.server.port = int(os.getenv("CONNECT_PORT"))

    return validate_config(config)


def save_config(config: ConnectConfig) -> None:
    """Save configuration to file.

    Store keys that were sourced from environment variables are written
    as empty strings so that secrets are not persisted to disk.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    env_sourced = getattr(config, "_env_sourced_keys", set())

    store_section = {
        "backend": config.store.backend,
        "url": config.store.url,
        "api_key": config.store.api_key,
        "service_key": config.store.service_key,
        "table": config.store.table,
        "timeout_seconds": config.store.timeout_seconds,
        "memory_path": config.store.memory_path,
    }
    for key in ("api_key", "service_key"):
        if key in env_sourced:
            store_section[key] = ""

    data = {
        "store": store_section,
        "search": {
            "default_limit": config.search.default_limit,
            "max_limit": config.search.max_limit,
            "candidate_pool": config.search.candidate_pool,
            "min_term_length": config.search.min_term_length,
            "on_empty_query": config.search.on_empty_query,
            "ranking_enabled": config.search.ranking_enabled,
            "field_weights": config.search.field_weights,
        },
        "enrichment": {
            "batch_size": config.enrichment.batch_size,
            "delay_seconds": config.enrichment.delay_seconds,
        },
        "server": {
            "host": config.server.host,
            "port": config.server.port,
        },
    }

    with open(CONFIG_PATH, "w") as f:
        json.dump(data, f, indent=2)

    # Set secure permissions
    CONFIG_PATH.chmod(0o600)
