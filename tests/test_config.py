"""Tests for culturepulse/config.py — key resolution, config sections."""

import json
import logging
import os
import stat
from pathlib import Path
from unittest.mock import patch

from culturepulse.config import DATA_DIR, LOGS_DIR, _get_key, get_section, load_config, save_config
from culturepulse.log import get_logger


class TestGetKey:
    def test_env_var_priority(self, isolated_config):
        isolated_config.write_text(json.dumps({"TEST_API_KEY": "from_config"}))
        with patch.dict(os.environ, {"TEST_API_KEY": "from_env"}):
            assert _get_key("TEST_API_KEY") == "from_env"

    def test_returns_empty_for_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _get_key("NONEXISTENT_KEY_XYZ") == ""

    def test_reads_from_config(self, isolated_config):
        isolated_config.write_text(json.dumps({"MY_KEY": "from_config"}))
        with patch.dict(os.environ, {}, clear=True):
            assert _get_key("MY_KEY") == "from_config"


class TestLoadConfig:
    def test_loads_valid_json(self, isolated_config):
        isolated_config.write_text(json.dumps({"key": "value"}))
        assert load_config() == {"key": "value"}

    def test_returns_empty_for_missing(self):
        assert load_config() == {}

    def test_returns_empty_for_invalid_json(self, isolated_config):
        isolated_config.write_text("not json")
        assert load_config() == {}

    def test_save_is_owner_only(self, isolated_config):
        save_config({"TWITTER_BEARER_TOKEN": "secret"})
        assert load_config() == {"TWITTER_BEARER_TOKEN": "secret"}
        assert stat.S_IMODE(isolated_config.stat().st_mode) == 0o600


class TestGetSection:
    def test_section(self, isolated_config):
        isolated_config.write_text(json.dumps({"agent": {"interval": 5}}))
        assert get_section("agent") == {"interval": 5}
        assert get_section("collector") == {}

    def test_non_dict_section_ignored(self, isolated_config):
        isolated_config.write_text(json.dumps({"agent": ["nope"]}))
        assert get_section("agent") == {}


class TestPaths:
    def test_data_dir_follows_env(self):
        home = Path(os.environ["CULTUREPULSE_HOME"])
        assert DATA_DIR == home
        assert LOGS_DIR == home / "logs"

    def test_log_file_written_under_data_dir(self):
        logger = get_logger()
        files = [h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert files
        assert all(Path(f).parent == LOGS_DIR for f in files)
