"""Unit tests for the signal handler module in the repotree CLI."""

import os
import signal
import sys
from unittest.mock import MagicMock, patch

import pytest

from repotree.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler

pytestmark = pytest.mark.skipif(not hasattr(signal, "SIGPIPE"), reason="SIGPIPE is not available")


@pytest.fixture
def mock_signal():
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    with patch("repotree.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    return SignalHandler()


def test_initial_state(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert not fresh_signal_handler.interrupted
    assert fresh_signal_handler.original_sigint_handler is not None


def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, MagicMock())

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert fresh_signal_handler.interrupted
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_handle_sigint(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.sigint_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


def test_reset(fresh_signal_handler):
    fresh_signal_handler.sigpipe_received.set()
    fresh_signal_handler.sigint_received.set()
    fresh_signal_handler.reset()

    assert not fresh_signal_handler.interrupted


def test_setup_signal_handling(mock_signal):
    setup_signal_handling()

    assert mock_signal.call_count == 2
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_with_no_signals(mock_os):
    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_cleanup_after_sigpipe(mock_os):
    signal_handler.sigpipe_received.set()
    try:
        with patch.object(sys, "stdout") as mock_stdout:
            mock_stdout.fileno.return_value = 1
            cleanup()
    finally:
        signal_handler.reset()

    mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)
