"""
Contract binder: turns abstract record contracts into concrete record types.

A contract is a public subclass of Record whose abstract methods declare
typed accessors:

    class Person(Record):

        @abstractmethod
        def get_name(self) -> Optional[str]: ...

        @abstractmethod
        def set_name(self, value: Optional[str]) -> "Person": ...

Readers are named get_<member> or is_<member> and take no arguments.
Writers are named set_<member> or with_<member>, take exactly one argument
whose annotation declares the member type, and return the contract (the
same record, for chaining) or None. The wire name of a member is the
accessor suffix in PascalCase, so get_slug_list reads field "SlugList".

RecordBox inspects each contract once, generates an implementation class
whose accessors read and write the record's backing dict, and caches the
result for the lifetime of the box.
"""

import inspect
import threading
import typing
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Optional, TypeVar

from ..errors import ArgumentError, ContractDefinitionError, TypeMismatchError
from ..logging.config import get_binder_logger, log_contract_bound
from .record import Record
from .typing_utils import is_record_contract, is_void, runtime_class, strip_optional
from .writer import RecordWriter

logger = get_binder_logger(__name__)

R = TypeVar("R", bound=Record)

READER_PREFIXES = ("get_", "is_")
WRITER_PREFIXES = ("set_", "with_")


@dataclass(frozen=True)
class Accessor:
    """One generated accessor: which member it touches and how."""
    method: str
    member: str
    kind: str                       # "reader" | "writer"
    declared_type: Any
    returns_self: bool = False


@dataclass(frozen=True)
class Binding:
    """
    The cached implementation of a single contract.

    Attributes:
        contract: The abstract contract class
        implementation: Generated concrete subclass of the contract
        members: Immutable member name -> declared type table
        accessors: Immutable method name -> Accessor table
    """
    contract: type
    implementation: type
    members: Mapping[str, Any]
    accessors: Mapping[str, Accessor]

    def create(self, entries: Optional[MutableMapping[str, Any]] = None) -> Record:
        """New record wrapping ``entries`` directly (a new dict when None)."""
        if entries is None:
            entries = {}
        return self.implementation(entries)


def member_name(suffix: str) -> str:
    """Wire field name for an accessor suffix (snake_case -> PascalCase)."""
    return "".join(part[:1].upper() + part[1:] for part in suffix.split("_") if part)


class RecordBox:
    """
    Creates records and caches one Binding per contract.

    Bindings are built at most once per contract, even under concurrent
    first use: lookups hit a lock-free cache, and misses serialize on a
    per-contract lock before re-checking the cache.
    """

    def __init__(self) -> None:
        self._cache: dict[type, Binding] = {}
        self._locks: dict[type, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def bind(self, contract: type[R]) -> Binding:
        """
        Get (building on first use) the binding for a contract.

        Raises:
            ArgumentError: If contract is None
            ContractDefinitionError: If the contract is not well-formed
        """
        if contract is None:
            raise ArgumentError("contract")

        binding = self._cache.get(contract)
        if binding is not None:
            return binding

        with self._lock_for(contract):
            binding = self._cache.get(contract)
            if binding is None:
                binding = self._build_binding(contract)
                self._cache[contract] = binding
            return binding

    def create(self, contract: type[R], entries: Optional[Mapping[str, Any]] = None) -> R:
        """New record bound to contract, holding a copy of ``entries``."""
        binding = self.bind(contract)
        copied = {} if entries is None else {
            name: value for name, value in entries.items() if value is not None
        }
        return binding.create(copied)  # type: ignore[return-value]

    def wrap(self, contract: type[R], entries: Mapping[str, Any]) -> R:
        """
        New record that aliases ``entries`` without copying.

        Explicit None values are removed from a mutable mapping. A read-only
        mapping produces a frozen record.
        """
        if entries is None:
            raise ArgumentError("entries")
        binding = self.bind(contract)
        if isinstance(entries, MutableMapping):
            for name in [k for k, v in entries.items() if v is None]:
                del entries[name]
        return binding.implementation(entries)  # type: ignore[no-any-return]

    def copy(self, record: Record, contract: Optional[type[R]] = None) -> R:
        """Independent copy of a record, optionally bound to another contract."""
        if record is None:
            raise ArgumentError("record")
        target = contract if contract is not None else record.contract
        return self.create(target, record.as_map())  # type: ignore[arg-type]

    def cast(self, contract: type[R], record: Record) -> R:
        """
        View the same entries through another contract.

        The result shares storage with ``record``; a frozen record casts to
        a frozen record.
        """
        if record is None:
            raise ArgumentError("record")
        binding = self.bind(contract)
        return binding.implementation(  # type: ignore[no-any-return]
            record._entries, frozen=record.frozen)

    def members_of(self, contract: type) -> Mapping[str, Any]:
        """Immutable member name -> declared type table of a contract."""
        return self.bind(contract).members

    def writer(self) -> RecordWriter:
        """New push-style writer that builds records with this box."""
        return RecordWriter(self)

    def _lock_for(self, contract: type) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(contract)
            if lock is None:
                lock = threading.Lock()
                self._locks[contract] = lock
            return lock

    def _build_binding(self, contract: type) -> Binding:
        _check_contract_class(contract)

        accessors: dict[str, Accessor] = {}
        members: dict[str, Any] = {}
        readers: dict[str, Accessor] = {}

        for method in sorted(getattr(contract, "__abstractmethods__", ())):
            accessor = _parse_accessor(contract, method)
            accessors[method] = accessor

            if accessor.kind == "reader":
                readers[method] = accessor
                continue

            previous = members.get(accessor.member)
            if previous is not None and previous != accessor.declared_type:
                raise ContractDefinitionError(
                    f"Conflicting declared types for member {accessor.member!r}: "
                    f"{previous!r} vs {accessor.declared_type!r}",
                    contract=contract,
                    accessor=method,
                )
            members[accessor.member] = accessor.declared_type

        for method, reader in readers.items():
            declared = members.get(reader.member)
            if declared is not None and \
                    strip_optional(declared) != strip_optional(reader.declared_type):
                raise ContractDefinitionError(
                    f"Reader {method} returns {reader.declared_type!r} but member "
                    f"{reader.member!r} is declared as {declared!r}",
                    contract=contract,
                    accessor=method,
                )

        namespace: dict[str, Any] = {
            "__slots__": (),
            "__module__": contract.__module__,
            "__qualname__": f"{contract.__qualname__}.Impl",
            "_contract": contract,
        }
        for method, accessor in accessors.items():
            namespace[method] = _implement(accessor)

        implementation = type(contract)(f"{contract.__name__}Impl", (contract,), namespace)

        log_contract_bound(logger, contract, members, len(accessors))

        return Binding(
            contract=contract,
            implementation=implementation,
            members=MappingProxyType(members),
            accessors=MappingProxyType(accessors),
        )


def _check_contract_class(contract: Any) -> None:
    if not is_record_contract(contract):
        raise ContractDefinitionError(
            f"{contract!r} is not a Record contract", contract=contract)
    if contract.__name__.startswith("_"):
        raise ContractDefinitionError(
            f"{contract.__qualname__} is not public", contract=contract)


def _parse_accessor(contract: type, method: str) -> Accessor:
    func = getattr(contract, method)
    if not inspect.isfunction(func):
        raise ContractDefinitionError(
            f"Unimplementable declaration: {contract.__qualname__}.{method}",
            contract=contract,
            accessor=method,
        )

    try:
        hints = typing.get_type_hints(func)
    except Exception as e:
        raise ContractDefinitionError(
            f"Cannot resolve annotations of {contract.__qualname__}.{method}: {e}",
            contract=contract,
            accessor=method,
        ) from e

    params = list(inspect.signature(func).parameters.values())[1:]
    for param in params:
        if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            raise ContractDefinitionError(
                f"Accessor {method} may only take positional parameters",
                contract=contract,
                accessor=method,
            )

    if method.startswith(READER_PREFIXES):
        suffix = method.split("_", 1)[1]
        if params:
            raise ContractDefinitionError(
                f"Cannot implement reader with parameters: {method}",
                contract=contract,
                accessor=method,
            )
        if "return" not in hints or is_void(hints["return"]):
            raise ContractDefinitionError(
                f"Cannot implement void reader: {method}",
                contract=contract,
                accessor=method,
            )
        return Accessor(method, member_name(suffix), "reader", hints["return"])

    if method.startswith(WRITER_PREFIXES):
        suffix = method.split("_", 1)[1]
        if len(params) != 1:
            raise ContractDefinitionError(
                f"Writer must have exactly one parameter: {method}",
                contract=contract,
                accessor=method,
            )
        if params[0].name not in hints:
            raise ContractDefinitionError(
                f"Writer parameter must declare the member type: {method}",
                contract=contract,
                accessor=method,
            )

        returns = hints.get("return")
        if is_void(returns):
            returns_self = False
        elif is_record_contract(returns) and issubclass(contract, returns):
            returns_self = True
        else:
            raise ContractDefinitionError(
                f"Writer must return the contract type or None: {method}",
                contract=contract,
                accessor=method,
            )
        return Accessor(method, member_name(suffix), "writer",
                        hints[params[0].name], returns_self)

    raise ContractDefinitionError(
        f"Unimplementable method: {contract.__qualname__}.{method}",
        contract=contract,
        accessor=method,
    )


def _implement(accessor: Accessor) -> Callable[..., Any]:
    member = accessor.member

    if accessor.kind == "reader":
        expected = runtime_class(accessor.declared_type)

        def reader(self: Record) -> Any:
            value = self._entries.get(member)
            if value is not None and expected is not None \
                    and not isinstance(value, expected):
                raise TypeMismatchError(
                    f"{member} holds {type(value).__name__}, "
                    f"expected {expected.__name__}",
                    field=member,
                    expected=expected,
                    actual=type(value),
                )
            return value

        reader.__name__ = accessor.method
        return reader

    returns_self = accessor.returns_self

    def writer(self: Record, value: Any) -> Optional[Record]:
        self.set(member, value)
        return self if returns_self else None

    writer.__name__ = accessor.method
    return writer
