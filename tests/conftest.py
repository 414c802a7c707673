"""Pytest configuration and shared fixtures."""

import pytest

from flexrecord import RecordBox
from flexrecord.codec import JsonRecordModule


@pytest.fixture
def box() -> RecordBox:
    """Fresh record box with an empty binding cache."""
    return RecordBox()


@pytest.fixture
def json_module(box: RecordBox) -> JsonRecordModule:
    """JSON module with standard chains and no type registry."""
    return JsonRecordModule(box=box)


@pytest.fixture
def hello_base64() -> str:
    """Base64 encoding of b"Hello World"."""
    return "SGVsbG8gV29ybGQ="
