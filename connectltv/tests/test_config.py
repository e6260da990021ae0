"""Tests for configuration loading, env overrides and validation."""

import json
import os
import pytest
from unittest.mock import patch


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        from connectltv.common.config import load_config
        missing = tmp_path / "config.json"

        with patch("connectltv.common.config.CONFIG_PATH", missing), \
             patch.dict(os.environ, {}, clear=True):
            cfg = load_config()

        assert cfg.store.backend == "postgrest"
        assert cfg.store.table == "LTV Alumni Database"
        assert cfg.search.default_limit == 10
        assert cfg.search.max_limit == 50
        assert cfg.search.min_term_length == 3
        assert cfg.search.on_empty_query == "return_none"
        assert cfg.search.field_weights["name"] == 10
        assert cfg.search.field_weights["location"] == 3
        assert cfg.enrichment.batch_size == 5
        assert cfg.enrichment.delay_seconds == 0.5

    def test_load_from_file(self, tmp_path):
        from connectltv.common.config import load_config
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({
            "store": {"backend": "memory", "memory_path": "/tmp/alumni.json"},
            "search": {"default_limit": 20, "field_weights": {"location": 6}},
            "enrichment": {"batch_size": 3},
        }))

        with patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, {}, clear=True):
            cfg = load_config()

        assert cfg.store.backend == "memory"
        assert cfg.store.memory_path == "/tmp/alumni.json"
        assert cfg.search.default_limit == 20
        assert cfg.search.field_weights["location"] == 6
        assert cfg.search.field_weights["name"] == 10
        assert cfg.enrichment.batch_size == 3

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        from connectltv.common.config import load_config
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, {}, clear=True):
            cfg = load_config()

        assert cfg.search.default_limit == 10

    def test_env_var_overrides(self, tmp_path):
        from connectltv.common.config import load_config
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"search": {"on_empty_query": "return_none"}}))

        env = {
            "SUPABASE_URL": "https://env.supabase.co",
            "SUPABASE_ANON_KEY": "anon-env",
            "CONNECT_TABLE": "Alumni",
            "CONNECT_SEARCH_LIMIT": "15",
            "CONNECT_MIN_TERM_LENGTH": "2",
            "CONNECT_ON_EMPTY_QUERY": "return_all",
            "CONNECT_RANKING_ENABLED": "false",
            "CONNECT_ENRICH_BATCH_SIZE": "8",
            "CONNECT_PORT": "9090",
        }
        with patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, env, clear=True):
            cfg = load_config()

        assert cfg.store.url == "https://env.supabase.co"
        assert cfg.store.api_key == "anon-env"
        assert cfg.store.table == "Alumni"
        assert cfg.search.default_limit == 15
        assert cfg.search.min_term_length == 2
        assert cfg.search.on_empty_query == "return_all"
        assert cfg.search.ranking_enabled is False
        assert cfg.enrichment.batch_size == 8
        assert cfg.server.port == 9090
        assert "api_key" in cfg._env_sourced_keys

    def test_unknown_empty_query_policy_rejected(self, tmp_path):
        from connectltv.common.config import load_config, ConfigError
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")

        with patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, {"CONNECT_ON_EMPTY_QUERY": "return_some"}, clear=True):
            with pytest.raises(ConfigError):
                load_config()

    def test_unknown_backend_rejected(self, tmp_path):
        from connectltv.common.config import load_config, ConfigError
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"store": {"backend": "sqlite"}}))

        with patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigError):
                load_config()

    def test_negative_weight_rejected(self):
        from connectltv.common.config import ConnectConfig, ConfigError, validate_config
        cfg = ConnectConfig()
        cfg.search.field_weights["stage"] = -1

        with pytest.raises(ConfigError):
            validate_config(cfg)


class TestSaveConfig:
    def test_save_config_omits_env_keys(self, tmp_path):
        from connectltv.common.config import load_config, save_config
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"store": {"service_key": "from-file"}}))

        env = {"SUPABASE_ANON_KEY": "anon-env"}
        with patch("connectltv.common.config.CONFIG_DIR", tmp_path), \
             patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, env, clear=True):
            cfg = load_config()
            save_config(cfg)

        saved = json.loads(config_file.read_text())
        assert saved["store"]["api_key"] == ""
        assert saved["store"]["service_key"] == "from-file"

    def test_save_then_load_round_trip(self, tmp_path):
        from connectltv.common.config import ConnectConfig, load_config, save_config
        config_file = tmp_path / "config.json"
        cfg = ConnectConfig()
        cfg.search.on_empty_query = "return_all"
        cfg.search.candidate_pool = 80

        with patch("connectltv.common.config.CONFIG_DIR", tmp_path), \
             patch("connectltv.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, {}, clear=True):
            save_config(cfg)
            loaded = load_config()

        assert loaded.search.on_empty_query == "return_all"
        assert loaded.search.candidate_pool == 80
        assert oct(config_file.stat().st_mode & 0o777) == oct(0o600)
