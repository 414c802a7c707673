"""
Push-style builder for records, lists and maps.

RecordWriter mirrors the serializer's event vocabulary so values can be
assembled programmatically one event at a time:

    person = (box.writer()
              .write_start_record(Person)
              .write_name("Name").write_value("Ada")
              .write_end_record()
              .finish())

Inside a map or record every value must be preceded by exactly one name;
inside a list names are not allowed. A value written with no open
container becomes the final result.
"""

from typing import TYPE_CHECKING, Any, Optional

from ..errors import ArgumentError, BuilderStateError
from .record import Record

if TYPE_CHECKING:
    from .binder import RecordBox


class _Context:
    """An open container on the writer's stack."""

    kind = "container"
    named = True

    def __init__(self, name: Optional[str]):
        # Name this container will be written under once it is closed
        self.name = name

    def value(self) -> Any:
        raise NotImplementedError

    def write(self, name: Optional[str], value: Any) -> None:
        raise NotImplementedError


class _ListContext(_Context):
    kind = "list"
    named = False

    def __init__(self, name: Optional[str]):
        super().__init__(name)
        self.items: list[Any] = []

    def value(self) -> Any:
        return self.items

    def write(self, name: Optional[str], value: Any) -> None:
        self.items.append(value)


class _MapContext(_Context):
    kind = "map"

    def __init__(self, name: Optional[str]):
        super().__init__(name)
        self.entries: dict[str, Any] = {}

    def value(self) -> Any:
        return self.entries

    def write(self, name: Optional[str], value: Any) -> None:
        if name is None:
            raise BuilderStateError("name must be set before writing into a map",
                                    state=self.kind)
        self.entries[name] = value


class _RecordContext(_Context):
    kind = "record"

    def __init__(self, name: Optional[str], record: Record):
        super().__init__(name)
        self.record = record

    def value(self) -> Any:
        return self.record

    def write(self, name: Optional[str], value: Any) -> None:
        if name is None:
            raise BuilderStateError("name must be set before writing into a record",
                                    state=self.kind)
        self.record.set(name, value)


class RecordWriter:
    """Builds one value from a sequence of write events."""

    def __init__(self, box: "RecordBox"):
        if box is None:
            raise ArgumentError("box")
        self._box = box
        self._stack: list[_Context] = []
        self._name: Optional[str] = None
        self._result: Any = None
        self._has_result = False
        self._finished = False

    def write_name(self, name: str) -> "RecordWriter":
        if name is None:
            raise ArgumentError("name")
        self._check_open()
        if self._name is not None:
            raise BuilderStateError(f"name already set to {self._name!r}",
                                    state=self._state())
        if not self._in_naming_context():
            raise BuilderStateError("must be in a map or record to write names",
                                    state=self._state())
        self._name = name
        return self

    def write_value(self, value: Any) -> "RecordWriter":
        if value is None:
            raise ArgumentError("value")
        self._check_open()
        self._emit(self._take_name(), value)
        return self

    def write_start_list(self) -> "RecordWriter":
        self._check_open()
        self._stack.append(_ListContext(self._take_name()))
        return self

    def write_end_list(self) -> "RecordWriter":
        return self._close(_ListContext)

    def write_start_map(self) -> "RecordWriter":
        self._check_open()
        self._stack.append(_MapContext(self._take_name()))
        return self

    def write_end_map(self) -> "RecordWriter":
        return self._close(_MapContext)

    def write_start_record(self, contract: type) -> "RecordWriter":
        self._check_open()
        name = self._take_name()
        self._stack.append(_RecordContext(name, self._box.create(contract)))
        return self

    def write_end_record(self) -> "RecordWriter":
        return self._close(_RecordContext)

    def finish(self) -> Any:
        """
        Return the built value. No further writes are accepted.

        Raises:
            BuilderStateError: If a list, map or record is still open
        """
        if self._stack:
            raise BuilderStateError(
                f"cannot finish with an open {self._stack[-1].kind}",
                state=self._state())
        self._finished = True
        return self._result

    def _close(self, expected: type) -> "RecordWriter":
        self._check_open()
        top = self._stack[-1] if self._stack else None
        if not isinstance(top, expected):
            raise BuilderStateError(f"not writing a {expected.kind}",
                                    state=self._state())
        if self._name is not None:
            raise BuilderStateError(f"name {self._name!r} has no value",
                                    state=self._state())
        self._stack.pop()
        self._emit(top.name, top.value())
        return self

    def _emit(self, name: Optional[str], value: Any) -> None:
        if self._stack:
            self._stack[-1].write(name, value)
        else:
            self._result = value
            self._has_result = True

    def _take_name(self) -> Optional[str]:
        name = self._name
        if name is None:
            if self._in_naming_context():
                raise BuilderStateError("name required in map and record",
                                        state=self._state())
        else:
            self._name = None
        return name

    def _in_naming_context(self) -> bool:
        return bool(self._stack) and self._stack[-1].named

    def _check_open(self) -> None:
        if self._finished:
            raise BuilderStateError("writer already finished", state="finished")
        if self._has_result:
            raise BuilderStateError("a complete value has already been written",
                                    state="complete")

    def _state(self) -> str:
        return self._stack[-1].kind if self._stack else "top"
