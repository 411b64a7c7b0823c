from unittest.mock import patch

import pytest

from repotree.cli.signal_handler import signal_handler


@pytest.fixture(autouse=True)
def clean_signal_state():
    """Keep handler installation and received signals from leaking between tests."""
    signal_handler.reset()
    with patch("repotree.cli.main.setup_signal_handling"):
        yield
    signal_handler.reset()
