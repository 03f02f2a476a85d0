import pytest

from cidrkit.config import LogSettings, set_settings
from cidrkit.logging_config import Severity, setup_logging


class RecordingSink:
    """Log sink that keeps every entry for inspection."""

    def __init__(self):
        self.entries: list[tuple[str, Severity, str]] = []

    def write(self, message: str, severity: Severity, component: str) -> None:
        self.entries.append((message, Severity(severity), component))

    def by_severity(self, severity: Severity) -> list[tuple[str, Severity, str]]:
        return [entry for entry in self.entries if entry[1] == severity]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture(autouse=True)
def isolated_logging():
    set_settings(LogSettings())
    yield
    set_settings(None)
    setup_logging(LogSettings(), enable_console=False)
