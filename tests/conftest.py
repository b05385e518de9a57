"""
Pytest configuration and shared fixtures.

Contains common test fixtures and setup for all test modules.
"""

import os
from typing import Dict, Generator, List, Optional, Type
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from logtrace.config import LoggingSettings, Settings, get_settings, reload_settings
from logtrace.core.stacktrace import Frame, StackTraceResolver
from logtrace.main import create_app


class FakeSymbolTable:
    """Symbol table with a fixed address -> frame mapping."""

    def __init__(self, frames: Dict[int, Frame]) -> None:
        self.frames = frames

    def lookup(self, pc: int) -> Optional[Frame]:
        return self.frames.get(pc)


class MockError:
    """Error value exposing both a message and a stack snapshot."""

    def __init__(self, msg: str, stack: Optional[List[int]] = None) -> None:
        self.msg = msg
        self.stack = list(stack or [])

    def error(self) -> str:
        return self.msg

    def stack_trace(self) -> List[int]:
        return self.stack

    def add(self, pc: int) -> "MockError":
        self.stack.append(pc)
        return self


class MessageOnlyError:
    """Error value exposing a message but no stack."""

    def __init__(self, msg: str) -> None:
        self.msg = msg

    def error(self) -> str:
        return self.msg


@pytest.fixture
def mock_error() -> Type[MockError]:
    """Error type with message and stack, built as mock_error(msg, stack)."""
    return MockError


@pytest.fixture
def message_error() -> Type[MessageOnlyError]:
    """Error type with a message only, built as message_error(msg)."""
    return MessageOnlyError


@pytest.fixture
def fake_frames() -> Dict[int, Frame]:
    """Known frames keyed by program counter."""
    return {
        0x1000: Frame(function="app.handlers.create_user", file="/srv/app/handlers.py", line=42),
        0x2000: Frame(function="app.service.UserService.create", file="/srv/app/service.py", line=17),
        0x3000: Frame(function="app.main.run", file="/srv/app/main.py", line=8),
    }


@pytest.fixture
def fake_symbols(fake_frames: Dict[int, Frame]) -> FakeSymbolTable:
    """Fake symbol table backed by ``fake_frames``."""
    return FakeSymbolTable(fake_frames)


@pytest.fixture
def fake_resolver(fake_symbols: FakeSymbolTable) -> StackTraceResolver:
    """Resolver over the fake symbol table."""
    return StackTraceResolver(fake_symbols)


@pytest.fixture
def clean_settings() -> Generator[None, None, None]:
    """Isolate settings from the environment and any config.yaml on disk."""
    with patch.dict(os.environ, {}, clear=False):
        for name in [key for key in os.environ if key.startswith("LOGTRACE_")]:
            del os.environ[name]
        with patch("logtrace.config.load_config_file", return_value={}):
            reload_settings()
            yield
    get_settings.cache_clear()


@pytest.fixture
def structured_settings() -> Settings:
    """Settings for JSON line output."""
    return Settings(log_level="DEBUG", logging=LoggingSettings(pretty_mode=False))


@pytest.fixture
def test_client(structured_settings: Settings) -> Generator[TestClient, None, None]:
    """FastAPI test client using structured logging."""
    app = create_app(structured_settings)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
