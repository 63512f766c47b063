"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from rowcheck.config.settings import ValidationSettings
from rowcheck.models import Record, RecordError
from rowcheck.store import IdentifierRegistry, RecordStore


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "cli: tests that drive the rowcheck CLI end to end")


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging() so later tests never write to a closed capture stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def validation_settings() -> ValidationSettings:
    """Default limits, independent of the process environment."""
    return ValidationSettings(
        max_string_length=255,
        name_min_length=2,
        phone_digits=10,
        phone_ignored_characters="-.()",
    )


@pytest.fixture
def valid_record() -> Record:
    """A record that passes every rule."""
    return Record(
        row=0,
        email="me@mail.com",
        phone="555.234.5678",
        first="Firstname",
        last="Lastname",
        identifier="foo",
    )


@pytest.fixture
def valid_record_error() -> RecordError:
    """A record error that passes every rule."""
    return RecordError(row=3, text="Email is invalid", identifier="foo")


@pytest.fixture
def registry() -> IdentifierRegistry:
    """Registry holding the 'foo' identifier."""
    reg = IdentifierRegistry()
    reg.create("foo")
    return reg


@pytest.fixture
def store(registry: IdentifierRegistry, validation_settings: ValidationSettings) -> RecordStore:
    return RecordStore(registry, settings=validation_settings)
