"""Shared test utilities and fixtures for the FBAFileUtil test suite.

This module provides common fixtures, utilities, and configuration
that can be used across all test modules.
"""

import logging
import shutil

# Import the modules for testing
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files that gets cleaned up automatically."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def deploy_config(temp_dir):
    """Flat deployment settings for FBAFileUtil."""
    return {
        "workspace-url": "https://ws.example.org/services/ws",
        "transform-plugin-path": "/kb/transform",
        "scratch": str(Path(temp_dir) / "scratch"),
    }


@pytest.fixture
def sample_config_file(temp_dir, deploy_config):
    """Create a sample INI deployment config file."""
    config_file = Path(temp_dir) / "deploy.cfg"
    lines = ["[FBAFileUtil]"]
    for key, value in deploy_config.items():
        lines.append(f"{key}={value}")
    config_file.write_text("\n".join(lines) + "\n")
    return config_file


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that change client and config behavior."""
    for key in [
        "KB_DEPLOYMENT_CONFIG",
        "KB_AUTH_TOKEN",
        "KBRPC_TAG",
        "KBRPC_METADATA",
        "KBRPC_ERROR_DEST",
        "CDMI_TIMEOUT",
    ]:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class FakeClock:
    """Monotonic clock that only advances when FakeSleep sleeps."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class FakeSleep:
    """Records sleep intervals and advances a FakeClock instead of blocking."""

    def __init__(self, clock):
        self.clock = clock
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)
        self.clock.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_sleep(fake_clock):
    return FakeSleep(fake_clock)


def make_response(payload, status=200, content_type="application/json", reason=None):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status
    response.reason = reason or ("OK" if status < 400 else "Internal Server Error")
    response.ok = status < 400
    response.headers = {"content-type": content_type}
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def response_factory():
    """Provide make_response as a fixture."""
    return make_response


class TestUtilities:
    """Utility class with helper methods for testing."""

    @staticmethod
    def create_test_config(temp_dir: str, sections: dict) -> Path:
        """Create a test configuration file with custom sections.

        Args:
            temp_dir: Temporary directory path
            sections: Dictionary of sections and their key-value pairs

        Returns:
            Path to the created config file
        """
        config_file = Path(temp_dir) / "custom_config.ini"
        content = ""
        for section_name, section_data in sections.items():
            content += f"[{section_name}]\n"
            for key, value in section_data.items():
                content += f"{key}={value}\n"
            content += "\n"
        config_file.write_text(content)
        return config_file

    @staticmethod
    def assert_log_contains(caplog, level: str, message: str):
        """Assert that a log message with specific level and content was recorded.

        Args:
            caplog: pytest caplog fixture
            level: Log level (INFO, WARNING, ERROR, DEBUG)
            message: Expected message content
        """
        level_num = getattr(logging, level.upper())
        for record in caplog.records:
            if record.levelno == level_num and message in record.message:
                return True
        pytest.fail(f"Log message '{message}' with level {level} not found in logs")


@pytest.fixture
def test_utils():
    """Provide the TestUtilities class as a fixture."""
    return TestUtilities


# Configure logging for tests
@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for all tests."""
    logging.basicConfig(level=logging.DEBUG, force=True)
    yield
    # Reset logging after tests
    logging.getLogger().handlers.clear()


# Marker for slow tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
