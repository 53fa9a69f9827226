"""
Tests for the host-side error reporting helper.
"""
import pytest

from utils import logger


@pytest.fixture
def release_mode(monkeypatch):
    monkeypatch.setattr(logger, 'DEBUG_MODE', False)
    monkeypatch.setattr(logger, '_notifier', None)
    monkeypatch.setattr(logger, '_main_window', None)


def test_debug_mode_reraises(monkeypatch):
    monkeypatch.setattr(logger, 'DEBUG_MODE', True)
    with pytest.raises(KeyError):
        logger.loggerRaise(KeyError('missing'), "Could not open creation")


def test_release_mode_notifies_then_reraises(release_mode):
    messages = []
    logger.set_notifier(lambda message, kind: messages.append((message, kind)))
    with pytest.raises(OSError):
        logger.loggerRaise(OSError('disk full'), "Failed to save creation")
    assert messages == [("Failed to save creation", 'error')]


def test_release_mode_defaults_to_exception_text(release_mode):
    messages = []
    logger.set_notifier(lambda message, kind: messages.append(message))
    with pytest.raises(ValueError):
        logger.loggerRaise(ValueError('bad record'))
    assert messages == ['bad record']


def test_release_mode_without_window_logs(release_mode, caplog):
    with pytest.raises(RuntimeError):
        logger.loggerRaise(RuntimeError('boom'), "Something failed")
    assert "Something failed" in caplog.text
