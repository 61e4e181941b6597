from __future__ import annotations

import logging

import pytest


@pytest.fixture
def logging_module(monkeypatch):
    from plugin_helpers import logging_config

    monkeypatch.delenv(logging_config.DEBUG_FLAG_ENV, raising=False)
    monkeypatch.delenv(logging_config.LOG_APPEND_ENV, raising=False)

    root = logging.getLogger()
    saved_level = root.level

    yield logging_config

    for handler in logging_config.owned_handlers(root):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(saved_level)


@pytest.fixture
def foreign_handler():
    """A console handler installed by the embedding application."""
    root = logging.getLogger()
    handler = logging.StreamHandler()
    root.addHandler(handler)
    yield handler
    root.removeHandler(handler)


def test_setup_logging_console_only(logging_module):
    logging_module.setup_logging()

    root = logging.getLogger()
    owned = logging_module.owned_handlers(root)
    assert len(owned) == 1
    assert isinstance(owned[0], logging.StreamHandler)
    assert root.level == logging.INFO


def test_setup_logging_debug_flag_lowers_level(logging_module, monkeypatch):
    monkeypatch.setenv(logging_module.DEBUG_FLAG_ENV, "1")
    assert logging_module.debug_enabled() is True

    logging_module.setup_logging()

    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.parametrize("raw", ["0", "off", "not-a-flag"])
def test_debug_flag_off_or_unrecognized(logging_module, monkeypatch, raw):
    monkeypatch.setenv(logging_module.DEBUG_FLAG_ENV, raw)
    assert logging_module.debug_enabled() is False


def test_setup_logging_writes_service_file(logging_module, tmp_path):
    logging_module.setup_logging(service_name="helpers", logs_dir=tmp_path / "logs")

    root = logging.getLogger()
    file_handlers = [handler for handler in logging_module.owned_handlers(root) if isinstance(handler, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(tmp_path / "logs" / "helpers.log")


def test_setup_logging_reads_logs_dir_from_environment(logging_module, monkeypatch, tmp_path):
    monkeypatch.setenv(logging_module.LOG_DIR_ENV, str(tmp_path / "env-logs"))

    logging_module.setup_logging(service_name="helpers")

    assert (tmp_path / "env-logs" / "helpers.log").exists()


def test_setup_logging_user_friendly_console_is_quiet(logging_module):
    logging_module.setup_logging(user_friendly=True)

    handler = logging_module.owned_handlers(logging.getLogger())[0]
    assert handler.level == logging.WARNING
    assert handler.formatter._fmt == "%(message)s"


def test_setup_logging_skips_when_already_configured(logging_module):
    logging_module.setup_logging()
    first = logging_module.owned_handlers(logging.getLogger())

    logging_module.setup_logging()

    assert logging_module.owned_handlers(logging.getLogger()) == first


def test_foreign_console_handler_does_not_block_configuration(logging_module, foreign_handler, monkeypatch):
    """A handler the application installed is neither mistaken for ours nor removed."""
    monkeypatch.setenv(logging_module.DEBUG_FLAG_ENV, "yes")

    logging_module.setup_logging()

    root = logging.getLogger()
    assert len(logging_module.owned_handlers(root)) == 1
    assert foreign_handler in root.handlers
    assert foreign_handler not in logging_module.owned_handlers(root)
    assert root.level == logging.DEBUG


def test_reconfiguring_with_service_replaces_only_owned_handlers(logging_module, foreign_handler, tmp_path):
    logging_module.setup_logging()
    logging_module.setup_logging(service_name="helpers", logs_dir=tmp_path)

    root = logging.getLogger()
    owned = logging_module.owned_handlers(root)
    assert len(owned) == 2
    assert sum(isinstance(handler, logging.FileHandler) for handler in owned) == 1
    assert foreign_handler in root.handlers
