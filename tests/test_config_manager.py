import configparser

import pytest

from spotifetch.exceptions import ConfigurationError
from spotifetch.models.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_HISTORY_KEY,
    MAX_HISTORY_ITEMS,
    AppConfig,
)
from spotifetch.storage.config_manager import ConfigManager


def test_missing_file_gives_defaults(tmp_path):
    config = ConfigManager(tmp_path / "config.ini").load_config()

    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.history_max_items == MAX_HISTORY_ITEMS
    assert config.history_storage_key == DEFAULT_HISTORY_KEY
    assert config.config_path == str(tmp_path)


def test_saved_settings_are_loaded_back(tmp_path):
    manager = ConfigManager(tmp_path / "nested" / "config.ini")
    manager.save_new_config(
        {"api_base_url": "https://lookup.example.com/api", "history_max_items": 3}
    )

    config = ConfigManager(tmp_path / "nested" / "config.ini").load_config()
    assert config.api_base_url == "https://lookup.example.com/api"
    assert config.history_max_items == 3
    assert config.request_timeout == AppConfig().request_timeout


def test_cli_options_override_file(tmp_path):
    manager = ConfigManager(tmp_path / "config.ini")
    manager.save_new_config({"request_timeout": 10})

    config = manager.load_config({"request_timeout": 2.5})
    assert config.request_timeout == 2.5


def test_missing_keys_are_migrated_into_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[DEFAULT]\nhistory_max_items = 4\n", encoding="utf-8")

    config = ConfigManager(path).load_config()
    assert config.history_max_items == 4

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(path, encoding="utf-8")
    assert set(parser["DEFAULT"]) == AppConfig.get_ini_keys()


@pytest.mark.parametrize(
    "contents",
    [
        "[DEFAULT]\nhistory_max_items = 0\n",
        "[DEFAULT]\nhistory_max_items = many\n",
        "[DEFAULT]\nrequest_timeout = -1\n",
        "[DEFAULT]\napi_base_url = ftp://example.com\n",
        "[DEFAULT]\nhistory_storage_key = ../outside\n",
        "not an ini file",
    ],
)
def test_invalid_file_raises_configuration_error(tmp_path, contents):
    path = tmp_path / "config.ini"
    path.write_text(contents, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path).load_config()


def test_saving_invalid_settings_is_refused(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path / "config.ini").save_new_config({"history_max_items": 99})
    assert not (tmp_path / "config.ini").exists()
