"""Tests for the "__type" field written and read through a TypeRegistry."""

from abc import abstractmethod
from typing import Any, Optional

import pytest

from flexrecord import Record, RecordBox, TypeRegistry
from flexrecord.codec import TYPE_FIELD, JsonRecordModule
from flexrecord.config import CodecParams


class Measured(Record):

    @abstractmethod
    def get_number(self) -> Optional[int]: ...

    @abstractmethod
    def set_number(self, value: Optional[int]) -> None: ...


class Unregistered(Record):

    @abstractmethod
    def get_name(self) -> Optional[str]: ...

    @abstractmethod
    def set_name(self, value: Optional[str]) -> None: ...


class Holder(Record):

    @abstractmethod
    def get_item(self) -> Optional[Record]: ...

    @abstractmethod
    def set_item(self, value: Optional[Record]) -> None: ...


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry.builder().register("test@1.0", Measured).build()


@pytest.fixture
def hinted_module(box: RecordBox, registry: TypeRegistry) -> JsonRecordModule:
    return JsonRecordModule(box=box, registry=registry)


class TestTypeHintWriting:
    """Test that registered contracts are written with their wire name."""

    def test_hint_written_first(self, hinted_module: JsonRecordModule,
                                box: RecordBox) -> None:
        """Test the leading "__type" field."""
        record = box.create(Measured)
        record.set_number(123)

        assert hinted_module.serialize(record) == b'{"__type":"test@1.0","Number":123}'

    def test_unregistered_contract_has_no_hint(self, hinted_module: JsonRecordModule,
                                               box: RecordBox) -> None:
        """Test that only registered contracts get a hint."""
        record = box.create(Unregistered)
        record.set_name("x")

        assert hinted_module.serialize(record) == b'{"Name":"x"}'

    def test_existing_hint_not_duplicated(self, hinted_module: JsonRecordModule,
                                          box: RecordBox) -> None:
        """Test that a retained "__type" entry is written once."""
        record = box.create(Measured, {TYPE_FIELD: "test@1.0", "Number": 1})

        assert hinted_module.serialize(record) == b'{"__type":"test@1.0","Number":1}'

    def test_hints_disabled(self, box: RecordBox, registry: TypeRegistry) -> None:
        """Test that hint output can be switched off while reading still works."""
        module = JsonRecordModule(box=box, registry=registry,
                                  codec=CodecParams(emit_type_hints=False))
        record = box.create(Measured)
        record.set_number(5)

        assert module.serialize(record) == b'{"Number":5}'
        assert module.deserialize(b'{"__type":"test@1.0"}').contract is Measured


class TestTypeHintReading:
    """Test contract resolution from "__type"."""

    def test_hint_selects_contract(self, hinted_module: JsonRecordModule) -> None:
        """Test reading with no target and a registered hint."""
        record = hinted_module.deserialize(b'{"__type":"test@1.0","Number":123}')

        assert record.contract is Measured
        assert record.get_number() == 123
        assert record.get(TYPE_FIELD) == "test@1.0"

    def test_hint_position_does_not_matter(self, hinted_module: JsonRecordModule) -> None:
        """Test that the hint may follow the other fields."""
        record = hinted_module.deserialize(b'{"Number":1,"__type":"test@1.0"}')

        assert record.contract is Measured

    @pytest.mark.parametrize("target", [None, Any, object])
    def test_generic_targets_use_hint(self, hinted_module: JsonRecordModule,
                                      target: Any) -> None:
        """Test that every unspecified target defers to the hint."""
        record = hinted_module.deserialize_to(b'{"__type":"test@1.0"}', target)

        assert record.contract is Measured

    def test_record_target_uses_hint(self, hinted_module: JsonRecordModule) -> None:
        """Test that the Record base target defers to the hint."""
        record = hinted_module.deserialize_to(b'{"__type":"test@1.0"}', Record)

        assert record.contract is Measured

    def test_record_target_without_hint(self, hinted_module: JsonRecordModule) -> None:
        """Test that a Record target with no usable hint is a generic record."""
        record = hinted_module.deserialize_to(b'{"__type":"bogus","A":1}', Record)

        assert record.contract is Record
        assert record.get("A") == 1

    def test_unknown_hint_without_target_is_map(self,
                                                hinted_module: JsonRecordModule) -> None:
        """Test that an unresolvable object stays a plain map."""
        result = hinted_module.deserialize(b'{"__type":"bogus","A":1}')

        assert result == {"__type": "bogus", "A": 1}

    def test_explicit_target_wins_over_hint(self, hinted_module: JsonRecordModule) -> None:
        """Test that an explicit contract ignores the hint."""
        record = hinted_module.deserialize_to(
            b'{"__type":"test@1.0","Name":"x"}', Unregistered)

        assert record.contract is Unregistered
        assert record.get_name() == "x"
        assert record.get(TYPE_FIELD) == "test@1.0"

    def test_non_string_hint_ignored(self, hinted_module: JsonRecordModule) -> None:
        """Test that a malformed hint is not used for lookup."""
        result = hinted_module.deserialize(b'{"__type":5}')

        assert result == {"__type": 5}

    def test_no_registry_ignores_hint(self, json_module: JsonRecordModule) -> None:
        """Test that hints need a registry."""
        result = json_module.deserialize(b'{"__type":"test@1.0"}')

        assert result == {"__type": "test@1.0"}

    def test_record_typed_member_resolves_hint(self, hinted_module: JsonRecordModule,
                                               box: RecordBox) -> None:
        """Test a member declared as Record holding a registered contract."""
        inner = box.create(Measured)
        inner.set_number(7)
        holder = box.create(Holder)
        holder.set_item(inner)

        wire = hinted_module.serialize(holder)
        result = hinted_module.deserialize_to(wire, Holder)

        assert wire == b'{"Item":{"__type":"test@1.0","Number":7}}'
        assert result.get_item().contract is Measured
        assert result.get_item().get_number() == 7
