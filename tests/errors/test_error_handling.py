"""
Error handling tests for binding, record usage and the codec.

Tests cover the error hierarchy, the context carried by each error, and the
lenient deserialization paths that log instead of raising.
"""

from abc import abstractmethod
from typing import Optional
from unittest.mock import patch

import pytest

from flexrecord import Record, RecordBox
from flexrecord.codec import JsonRecordModule, binary
from flexrecord.errors import (
    ArgumentError,
    BuilderStateError,
    CodecError,
    ConfigurationError,
    ContractDefinitionError,
    DispatchError,
    DuplicateRegistrationError,
    GeneratorStateError,
    ImmutableRecordError,
    ParseError,
    TypeMismatchError,
    UsageError,
)


class Blob(Record):

    @abstractmethod
    def get_data(self) -> Optional[bytes]: ...

    @abstractmethod
    def set_data(self, value: Optional[bytes]) -> None: ...


class TestErrorClassification:
    """Test error classification system."""

    def test_configuration_error_hierarchy(self) -> None:
        """Test that declaration errors share a base."""
        base_error = ConfigurationError("base error")
        assert base_error.recoverable is False
        assert base_error.context == {}

        contract_error = ContractDefinitionError(
            "bad", contract=Blob, accessor="get_data", context={"hint": 1})
        assert isinstance(contract_error, ConfigurationError)
        assert contract_error.contract is Blob
        assert contract_error.accessor == "get_data"
        assert contract_error.context == {"hint": 1}

        assert issubclass(DuplicateRegistrationError, ConfigurationError)

    def test_usage_error_hierarchy(self) -> None:
        """Test that usage errors also match the matching builtin errors."""
        argument_error = ArgumentError("entries")
        assert str(argument_error) == "entries must not be None"
        assert argument_error.argument == "entries"
        assert isinstance(argument_error, ValueError)
        assert isinstance(argument_error, UsageError)

        assert issubclass(TypeMismatchError, TypeError)
        assert issubclass(ImmutableRecordError, UsageError)
        assert issubclass(BuilderStateError, UsageError)

    def test_codec_error_hierarchy(self) -> None:
        """Test that codec errors share a base."""
        for error_class in (DispatchError, ParseError, GeneratorStateError):
            assert issubclass(error_class, CodecError)

        parse_error = ParseError("bad token", event="end_map")
        assert parse_error.event == "end_map"
        assert parse_error.recoverable is False

    def test_error_families_are_distinct(self) -> None:
        """Test that callers can catch one family without the others."""
        assert not issubclass(CodecError, UsageError)
        assert not issubclass(UsageError, ConfigurationError)
        assert not issubclass(ConfigurationError, CodecError)


class TestLenientDeserialization:
    """Test that best-effort fallbacks are logged, not raised."""

    def test_malformed_base64_logged(self, json_module: JsonRecordModule) -> None:
        """Test that a base64 fallback keeps the string and logs a warning."""
        with patch.object(binary, "log_lenient_fallback") as log_fallback:
            blob = json_module.deserialize_to(b'{"Data":"%%%"}', Blob)

        assert blob.get("Data") == "%%%"
        log_fallback.assert_called_once()
        assert log_fallback.call_args.args[1] == "binary"

        with pytest.raises(TypeMismatchError):
            blob.get_data()

    def test_parse_error_chains_cause(self, json_module: JsonRecordModule) -> None:
        """Test that tokenizer errors are kept as the cause."""
        with pytest.raises(ParseError) as exc_info:
            json_module.deserialize(b"{")

        assert exc_info.value.__cause__ is not None


class TestUsageErrors:
    """Test runtime misuse of the record API."""

    def test_frozen_write_carries_context(self, box: RecordBox) -> None:
        """Test the context on immutability errors."""
        blob = box.create(Blob).freeze()

        with pytest.raises(ImmutableRecordError) as exc_info:
            blob.set_data(b"x")

        assert exc_info.value.contract is Blob
        assert exc_info.value.field == "Data"

    def test_dispatch_error_for_nested_value(self, json_module: JsonRecordModule,
                                             box: RecordBox) -> None:
        """Test that an unserializable field aborts serialization."""
        blob = box.create(Blob).set("Other", object())

        with pytest.raises(DispatchError) as exc_info:
            json_module.serialize(blob)

        assert exc_info.value.value_type is object
