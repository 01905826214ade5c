"""Tests for the logging helper used by command-line drivers."""

import logging
from types import SimpleNamespace

from raycaster import log
from raycaster.log import DEFAULT_FORMAT, setup_default_logging


def _fake_logging(monkeypatch, handlers):
    """Swap the logging module seen by raycaster.log for a recorder."""
    calls = []
    root = SimpleNamespace(handlers=handlers)
    fake = SimpleNamespace(
        DEBUG=logging.DEBUG,
        INFO=logging.INFO,
        WARNING=logging.WARNING,
        getLogger=lambda: root,
        basicConfig=lambda **kw: calls.append(kw),
    )
    monkeypatch.setattr(log, "logging", fake)
    return calls


class TestSetupDefaultLogging:
    """setup_default_logging configures the root logger at most once."""

    def test_noop_when_handlers_exist(self, monkeypatch):
        calls = _fake_logging(monkeypatch, handlers=[logging.NullHandler()])
        setup_default_logging("DEBUG")
        assert calls == []

    def test_configures_bare_root(self, monkeypatch):
        calls = _fake_logging(monkeypatch, handlers=[])
        setup_default_logging("debug")
        assert calls == [{"level": logging.DEBUG, "format": DEFAULT_FORMAT}]

    def test_numeric_level(self, monkeypatch):
        calls = _fake_logging(monkeypatch, handlers=[])
        setup_default_logging(logging.WARNING)
        assert calls[0]["level"] == logging.WARNING

    def test_unknown_level_name_falls_back_to_info(self, monkeypatch):
        calls = _fake_logging(monkeypatch, handlers=[])
        setup_default_logging("chatty")
        assert calls[0]["level"] == logging.INFO
