#!/usr/bin/env python3
"""
Basic Usage Example - flexrecord

This script demonstrates the basic usage of flexrecord. It shows how to:
- Declare a record contract
- Create and fill records through generated accessors
- Write records to JSON with in-band type hints
- Read JSON back into records, with and without a target type
- Build a record with the push-style writer

Run: python examples/basic_usage.py
"""

import uuid
from abc import abstractmethod
from typing import Optional

from flexrecord import Int8, Record, RecordBox, TypeRegistry
from flexrecord.codec import JsonRecordModule
from flexrecord.logging import configure_logging


class Address(Record):

    @abstractmethod
    def get_city(self) -> Optional[str]: ...

    @abstractmethod
    def with_city(self, value: Optional[str]) -> "Address": ...


class Person(Record):

    @abstractmethod
    def get_name(self) -> Optional[str]: ...

    @abstractmethod
    def with_name(self, value: Optional[str]) -> "Person": ...

    @abstractmethod
    def get_age(self) -> Optional[Int8]: ...

    @abstractmethod
    def with_age(self, value: Optional[Int8]) -> "Person": ...

    @abstractmethod
    def get_id(self) -> Optional[uuid.UUID]: ...

    @abstractmethod
    def with_id(self, value: Optional[uuid.UUID]) -> "Person": ...

    @abstractmethod
    def get_addresses(self) -> Optional[list[Address]]: ...

    @abstractmethod
    def with_addresses(self, value: Optional[list[Address]]) -> "Person": ...


def print_record(label: str, record: Record) -> None:
    """Print a record with its contract and fields."""
    contract = record.contract.__name__ if record.contract else "?"
    print(f"📄 {label} ({contract}):")
    for name, value in record.entries():
        print(f"    {name}: {value!r}")


def main():
    """Run the basic usage demonstration."""
    configure_logging(level="WARNING")

    print("🚀 flexrecord - Basic Usage Demo")
    print("=" * 60)

    print("1. Creating a record box and a JSON module...")
    box = RecordBox()
    registry = TypeRegistry.builder().register("person@1.0", Person).build()
    module = JsonRecordModule(box=box, registry=registry)
    print(f"   Registered types: {registry}")
    print()

    print("2. Filling a record through its accessors...")
    person = (box.create(Person)
              .with_name("Ada")
              .with_age(Int8(36))
              .with_id(uuid.UUID("12345678-1234-5678-1234-567812345678"))
              .with_addresses([box.create(Address).with_city("London")]))
    person.set("Nickname", "Countess")
    print_record("Person", person)
    print(f"   Members: {sorted(box.members_of(Person))}")
    print()

    print("3. Writing JSON...")
    wire = module.serialize(person)
    print(f"   {wire.decode()}")
    print()

    print("4. Reading JSON back without a target (using the __type hint)...")
    restored = module.deserialize(wire)
    print_record("Restored", restored)
    print(f"   Equal to original (ignoring __type): "
          f"{restored.get_addresses() == person.get_addresses()}")
    print()

    print("5. Reading a value too large for its declared type...")
    overflow = module.deserialize_to(b'{"Age": 1000}', Person)
    print(f"   Stored as: {overflow.get('Age')!r} ({type(overflow.get('Age')).__name__})")
    print()

    print("6. Building a record with the push-style writer...")
    built = (module.writer()
             .write_start_record(Address)
             .write_name("City").write_value("Paris")
             .write_end_record()
             .finish())
    print_record("Built", built)
    print(f"   JSON: {module.serialize(built).decode()}")
    print()

    print("✅ Demo complete")


if __name__ == "__main__":
    main()
