"""
Dictionary-backed record model.

A Record is a named-field value whose storage is a plain dict. Contracts are
abstract subclasses of Record that declare typed accessors; the binder
generates the concrete implementation for each contract. Any field name can
still be read or written directly through get/set, so data outside the
contract survives a round trip.
"""

from abc import ABC
from collections.abc import ItemsView, Iterator, Mapping, MutableMapping
from typing import Any, Optional

from ..errors import ArgumentError, ImmutableRecordError


class Record(ABC):
    """
    Base class for all records and record contracts.

    Equality and hashing look only at the entries: two records holding the
    same fields are equal even when bound to different contracts.
    """

    __slots__ = ("_entries", "_frozen")

    # Set on the implementation class generated for each contract
    _contract: Optional[type] = None

    def __init__(self, entries: Mapping[str, Any], frozen: bool = False):
        if entries is None:
            raise ArgumentError("entries")
        if isinstance(entries, _FrozenView):
            entries, frozen = entries._record._entries, True
        self._entries = entries
        self._frozen = frozen or not isinstance(entries, MutableMapping)

    @property
    def contract(self) -> Optional[type]:
        """The contract this record was bound against."""
        return self._contract

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Record":
        """Make this record permanently immutable. Returns self."""
        self._frozen = True
        return self

    def get(self, name: str) -> Any:
        """Value of a field, or None when the field is absent."""
        if name is None:
            raise ArgumentError("name")
        _check_name(name)
        return self._entries.get(name)

    def set(self, name: str, value: Any) -> "Record":
        """
        Set a field and return self. Setting None removes the field.

        Raises:
            ImmutableRecordError: If the record is frozen
        """
        if name is None:
            raise ArgumentError("name")
        _check_name(name)
        if self._frozen:
            raise ImmutableRecordError(
                f"cannot set {name!r} on a frozen record",
                contract=self._contract,
                field=name,
            )

        if value is None:
            self._entries.pop(name, None)
        else:
            self._entries[name] = value
        return self

    def entries(self) -> ItemsView:
        return self._entries.items()

    def as_map(self) -> Mapping[str, Any]:
        """
        The backing mapping.

        Mutations through the returned dict affect this record. A frozen
        record returns a read-only view instead.
        """
        if self._frozen:
            return _FrozenView(self)
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Record):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __hash__(self) -> int:
        return hash(_hashable(self))

    def __repr__(self) -> str:
        name = self._contract.__name__ if self._contract else type(self).__name__
        return f"{name}({dict(self._entries)!r})"


def _check_name(name: Any) -> None:
    if not isinstance(name, str):
        raise ArgumentError("name", f"field name {name!r} is not a str")


class _FrozenView(MutableMapping):
    """Read-only mapping over a frozen record's entries."""

    __slots__ = ("_record",)

    def __init__(self, record: Record):
        self._record = record

    def __getitem__(self, name: str) -> Any:
        return self._record._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._record._entries)

    def __len__(self) -> int:
        return len(self._record._entries)

    def __setitem__(self, name: str, value: Any) -> None:
        self._refuse(name)

    def __delitem__(self, name: str) -> None:
        self._refuse(name)

    def _refuse(self, name: str) -> None:
        raise ImmutableRecordError(
            f"cannot change {name!r} through a frozen record's map",
            contract=self._record.contract,
            field=name,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._record._entries)!r})"


def _hashable(value: Any) -> Any:
    """Structural, hashable stand-in for a field value."""
    if isinstance(value, Record):
        return frozenset((k, _hashable(v)) for k, v in value.entries())
    if isinstance(value, Mapping):
        return frozenset((k, _hashable(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_hashable(v) for v in value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value
