"""Unit tests for the contract binder."""

import threading
from abc import abstractmethod
from typing import Optional
from unittest.mock import patch

import pytest

from flexrecord import Int8, Record, RecordBox
from flexrecord.core.binder import member_name
from flexrecord.errors import ArgumentError, ContractDefinitionError, TypeMismatchError


class Person(Record):

    @abstractmethod
    def get_name(self) -> Optional[str]: ...

    @abstractmethod
    def with_name(self, value: Optional[str]) -> "Person": ...

    @abstractmethod
    def get_slug_list(self) -> Optional[list[str]]: ...

    @abstractmethod
    def set_slug_list(self, value: Optional[list[str]]) -> None: ...

    @abstractmethod
    def is_active(self) -> Optional[bool]: ...

    @abstractmethod
    def set_active(self, value: bool) -> None: ...

    def display_name(self) -> str:
        return self.get_name() or "anonymous"


class Employee(Person):

    @abstractmethod
    def get_level(self) -> Optional[Int8]: ...

    @abstractmethod
    def with_level(self, value: Optional[Int8]) -> Person: ...


class Counter(Record):

    @abstractmethod
    def get_count(self) -> Optional[int]: ...

    @abstractmethod
    def set_count(self, value: Optional[int]) -> None: ...


class ReaderWithArgument(Record):

    @abstractmethod
    def get_foo(self, index: int) -> Optional[str]: ...


class VoidReader(Record):

    @abstractmethod
    def get_foo(self) -> None: ...


class TwoArgumentWriter(Record):

    @abstractmethod
    def set_foo(self, first: str, second: str) -> None: ...


class WriterReturningValue(Record):

    @abstractmethod
    def set_foo(self, value: str) -> int: ...


class UnannotatedWriter(Record):

    @abstractmethod
    def set_foo(self, value) -> None: ...


class UnknownAccessor(Record):

    @abstractmethod
    def compute_foo(self) -> int: ...


class ConflictingWriters(Record):

    @abstractmethod
    def set_foo(self, value: str) -> None: ...

    @abstractmethod
    def with_foo(self, value: int) -> "ConflictingWriters": ...


class ReaderWriterMismatch(Record):

    @abstractmethod
    def get_foo(self) -> Optional[int]: ...

    @abstractmethod
    def set_foo(self, value: Optional[str]) -> None: ...


class _Hidden(Record):

    @abstractmethod
    def get_foo(self) -> Optional[str]: ...


class NotARecord:

    @abstractmethod
    def get_foo(self) -> Optional[str]: ...


class TestMemberName:
    """Test accessor suffix to wire name conversion."""

    def test_pascal_case(self) -> None:
        """Test snake_case suffixes become PascalCase wire names."""
        assert member_name("foo") == "Foo"
        assert member_name("slug_list") == "SlugList"
        assert member_name("uuid") == "Uuid"


class TestBinding:
    """Test bindings of well-formed contracts."""

    def test_member_table(self, box: RecordBox) -> None:
        """Test that members are captured from writer argument types."""
        members = box.members_of(Person)

        assert dict(members) == {
            "Name": Optional[str],
            "SlugList": Optional[list[str]],
            "Active": bool,
        }
        with pytest.raises(TypeError):
            members["Other"] = str  # type: ignore[index]

    def test_inherited_members(self, box: RecordBox) -> None:
        """Test that a derived contract has its base's members too."""
        members = box.members_of(Employee)

        assert set(members) == {"Name", "SlugList", "Active", "Level"}

    def test_with_writer_chains_on_same_record(self, box: RecordBox) -> None:
        """Test that with_ writers mutate in place and return the record."""
        person = box.create(Person)

        result = person.with_name("Ada")

        assert result is person
        assert person.get_name() == "Ada"

    def test_writer_returning_base_contract_chains(self, box: RecordBox) -> None:
        """Test chaining through a writer declared to return a base contract."""
        employee = box.create(Employee)

        assert employee.with_level(Int8(3)).with_name("Bob") is employee
        assert employee.get_level() == 3

    def test_set_writer_returns_none(self, box: RecordBox) -> None:
        """Test that void writers return nothing."""
        person = box.create(Person)

        assert person.set_slug_list(["a"]) is None
        assert person.get("SlugList") == ["a"]

    def test_is_reader(self, box: RecordBox) -> None:
        """Test boolean readers with the is_ prefix."""
        person = box.create(Person)
        person.set_active(True)

        assert person.is_active() is True
        assert person.get("Active") is True

    def test_helper_methods_are_kept(self, box: RecordBox) -> None:
        """Test that concrete methods on a contract are not accessors."""
        person = box.create(Person)
        assert person.display_name() == "anonymous"

        person.with_name("Ada")
        assert person.display_name() == "Ada"

    def test_reader_type_mismatch(self, box: RecordBox) -> None:
        """Test that a badly typed stored value surfaces on read."""
        person = box.create(Person, {"Name": 42})

        with pytest.raises(TypeMismatchError) as exc_info:
            person.get_name()

        assert exc_info.value.field == "Name"
        assert exc_info.value.expected is str
        assert exc_info.value.actual is int
        assert isinstance(exc_info.value, TypeError)

    def test_generic_members_check_origin(self, box: RecordBox) -> None:
        """Test that list members are checked against list, not element type."""
        person = box.create(Person, {"SlugList": "not-a-list"})

        with pytest.raises(TypeMismatchError):
            person.get_slug_list()

    def test_record_base_is_bindable(self, box: RecordBox) -> None:
        """Test that Record itself binds as a memberless contract."""
        record = box.create(Record, {"Anything": 1})

        assert record.contract is Record
        assert dict(box.members_of(Record)) == {}
        assert record.get("Anything") == 1

    def test_none_contract(self, box: RecordBox) -> None:
        """Test that binding None is an argument error."""
        with pytest.raises(ArgumentError):
            box.bind(None)  # type: ignore[arg-type]


class TestRecordCreation:
    """Test create, wrap, copy and cast."""

    def test_create_copies_entries(self, box: RecordBox) -> None:
        """Test that create never aliases the caller's mapping."""
        entries = {"Count": 1, "Dropped": None}
        counter = box.create(Counter, entries)
        counter.set_count(2)

        assert entries["Count"] == 1
        assert "Dropped" not in counter

    def test_wrap_aliases_entries(self, box: RecordBox) -> None:
        """Test that wrap shares storage with the caller's mapping."""
        entries = {"Count": 1, "Dropped": None}
        counter = box.wrap(Counter, entries)
        counter.set_count(2)

        assert entries == {"Count": 2}

    def test_copy_is_independent(self, box: RecordBox) -> None:
        """Test that a copy does not share storage."""
        counter = box.create(Counter, {"Count": 1}).freeze()
        duplicate = box.copy(counter)
        duplicate.set_count(5)

        assert counter.get_count() == 1
        assert duplicate.contract is Counter
        assert not duplicate.frozen

    def test_copy_to_other_contract(self, box: RecordBox) -> None:
        """Test copying a record into another contract."""
        person = box.create(Person).with_name("Ada")
        copy = box.copy(person, Employee)

        assert copy.contract is Employee
        assert copy.get_name() == "Ada"

    def test_cast_shares_storage(self, box: RecordBox) -> None:
        """Test that a cast is a view over the same entries."""
        person = box.create(Person)
        employee = box.cast(Employee, person)
        employee.with_level(Int8(1))

        assert person.get("Level") == 1
        assert employee == person

    def test_cast_preserves_frozen(self, box: RecordBox) -> None:
        """Test that casting a frozen record yields a frozen record."""
        person = box.create(Person).freeze()

        assert box.cast(Employee, person).frozen


class TestContractValidation:
    """Test rejection of malformed contracts."""

    @pytest.mark.parametrize("contract", [
        ReaderWithArgument,
        VoidReader,
        TwoArgumentWriter,
        WriterReturningValue,
        UnannotatedWriter,
        UnknownAccessor,
        ConflictingWriters,
        ReaderWriterMismatch,
        _Hidden,
        NotARecord,
    ])
    def test_malformed_contract_rejected(self, box: RecordBox, contract: type) -> None:
        """Test that each malformed declaration fails at bind time."""
        with pytest.raises(ContractDefinitionError) as exc_info:
            box.bind(contract)

        assert exc_info.value.contract is contract
        assert exc_info.value.recoverable is False

    def test_error_names_accessor(self, box: RecordBox) -> None:
        """Test that the offending accessor is reported."""
        with pytest.raises(ContractDefinitionError) as exc_info:
            box.bind(UnknownAccessor)

        assert exc_info.value.accessor == "compute_foo"
        assert "Unimplementable method" in str(exc_info.value)

    def test_rejection_is_not_cached(self, box: RecordBox) -> None:
        """Test that a failed bind fails again on the next attempt."""
        for _ in range(2):
            with pytest.raises(ContractDefinitionError):
                box.create(VoidReader)


class TestBindingCache:
    """Test that bindings are built once per contract."""

    def test_binding_is_cached(self, box: RecordBox) -> None:
        """Test that repeated binds return the same binding."""
        first = box.bind(Person)
        second = box.bind(Person)

        assert first is second
        assert type(box.create(Person)) is first.implementation

    def test_boxes_do_not_share_cache(self) -> None:
        """Test that each box owns its bindings."""
        assert RecordBox().bind(Person) is not RecordBox().bind(Person)

    def test_concurrent_first_use_builds_once(self, box: RecordBox) -> None:
        """Test that racing threads observe a single binding."""
        threads_count = 8
        barrier = threading.Barrier(threads_count)
        results = []
        lock = threading.Lock()

        def bind() -> None:
            barrier.wait()
            binding = box.bind(Counter)
            with lock:
                results.append(binding)

        with patch.object(RecordBox, "_build_binding", autospec=True,
                          side_effect=RecordBox._build_binding) as build:
            threads = [threading.Thread(target=bind) for _ in range(threads_count)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert build.call_count == 1
        assert len(results) == threads_count
        assert all(binding is results[0] for binding in results)
