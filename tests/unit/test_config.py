import logging

import pytest

from hnradar import config
from hnradar.config import PAGE_SIZE, Settings, load_config, setup_logging


def test_defaults_without_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "get_config_path", lambda: tmp_path / "missing.yml")
    settings = load_config()

    assert settings.page_size == PAGE_SIZE
    assert settings.get("api.base_url") == "https://hacker-news.firebaseio.com/v0"
    assert settings.get("view.comment_rows") == 3


def test_user_config_overrides_defaults(tmp_path):
    config_file = tmp_path / "config.yml"
    config_file.write_text("api:\n  concurrency: 4\nview:\n  page_size: 30\n")
    settings = load_config(str(config_file))

    assert settings.get("api.concurrency") == 4
    assert settings.page_size == 30
    # untouched keys keep their defaults
    assert settings.get("api.timeout") == 10


def test_explicit_config_must_exist():
    with pytest.raises(FileNotFoundError):
        load_config("non_existent_file.yml")


def test_broken_default_config_is_ignored(tmp_path, monkeypatch, caplog):
    broken = tmp_path / "user_config.yml"
    broken.write_text("api: [unclosed\n")
    monkeypatch.setattr(config, "get_config_path", lambda: broken)

    with caplog.at_level(logging.ERROR, logger="hnradar.config"):
        settings = load_config()

    assert settings.page_size == PAGE_SIZE
    assert "Failed to read user config" in caplog.text


def test_get_missing_key_returns_default():
    settings = Settings()
    assert settings.get("api.nope", "fallback") == "fallback"
    assert settings.get("log_level.deeper") is None


def test_setup_logging_writes_to_file(tmp_path):
    root = logging.getLogger()
    old_level = root.level
    log_path = tmp_path / "logs" / "hnradar.log"

    setup_logging(Settings(), debug=True, log_path=log_path)
    try:
        logging.getLogger("hnradar.test").debug("hello from the test")
        for handler in root.handlers:
            handler.flush()
        assert "hello from the test" in log_path.read_text()
    finally:
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(old_level)
