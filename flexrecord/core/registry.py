"""
Bijective registry between record contracts and stable wire type names.

Wire names (for example "person@1.0") are implementation-independent and
are written in-band as the "__type" field so a reader can pick the right
local contract without being told the target type.
"""

from types import MappingProxyType
from typing import Optional

from ..errors import ArgumentError, DuplicateRegistrationError
from ..logging.config import get_binder_logger

logger = get_binder_logger(__name__)


class TypeRegistry:
    """Immutable name <-> contract mapping. Create one with builder()."""

    @staticmethod
    def builder() -> "TypeRegistry.Builder":
        return TypeRegistry.Builder()

    def __init__(self, names: dict[type, str], types: dict[str, type]):
        self._names = MappingProxyType(dict(names))
        self._types = MappingProxyType(dict(types))

    def get_name(self, contract: type) -> Optional[str]:
        """Wire name registered for a contract, or None."""
        if contract is None:
            raise ArgumentError("contract")
        return self._names.get(contract)

    def get_type(self, name: str) -> Optional[type]:
        """Contract registered under a wire name, or None."""
        if name is None:
            raise ArgumentError("name")
        return self._types.get(name)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{name!r}: {contract.__qualname__}"
                          for name, contract in self._types.items())
        return f"TypeRegistry({{{pairs}}})"

    class Builder:
        """Fluent builder; may keep registering after build()."""

        def __init__(self) -> None:
            self._names: dict[type, str] = {}
            self._types: dict[str, type] = {}

        def register(self, name: str, contract: type) -> "TypeRegistry.Builder":
            """
            Bind a wire name to a contract.

            Raises:
                DuplicateRegistrationError: If either side is already registered
            """
            if name is None:
                raise ArgumentError("name")
            if contract is None:
                raise ArgumentError("contract")

            if name in self._types:
                raise DuplicateRegistrationError(
                    f"name {name} already registered to {self._types[name].__qualname__}",
                    name=name,
                    contract=contract,
                )
            if contract in self._names:
                raise DuplicateRegistrationError(
                    f"type {contract.__qualname__} already registered as {self._names[contract]}",
                    name=name,
                    contract=contract,
                )

            self._names[contract] = name
            self._types[name] = contract
            return self

        def build(self) -> "TypeRegistry":
            registry = TypeRegistry(self._names, self._types)
            logger.debug("Type registry built", names=sorted(self._types))
            return registry
