"""Helpers for inspecting declared member and target types."""

import collections.abc
import types
from typing import Any, Optional, Union, get_args, get_origin

from .record import Record

_LIST_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_MAP_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_UNION_TYPES = (Union, getattr(types, "UnionType", Union))


def strip_optional(tp: Any) -> Any:
    """Return X for Optional[X] / X | None; anything else unchanged."""
    if get_origin(tp) in _UNION_TYPES:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def is_void(tp: Any) -> bool:
    return tp is None or tp is type(None)


def element_type(tp: Any) -> Optional[Any]:
    """Declared element type of list[X], or None when unknown."""
    if get_origin(tp) in _LIST_ORIGINS:
        args = get_args(tp)
        if len(args) == 1:
            return args[0]
    return None


def key_value_types(tp: Any) -> tuple[Optional[Any], Optional[Any]]:
    """Declared (key, value) types of dict[K, V], or (None, None)."""
    if get_origin(tp) in _MAP_ORIGINS:
        args = get_args(tp)
        if len(args) == 2:
            return args[0], args[1]
    return None, None


def runtime_class(tp: Any) -> Optional[type]:
    """
    The class an isinstance check can use for a declared type.

    Generic aliases erase to their origin (list[str] -> list). Returns None
    when the declaration cannot be checked at runtime (Any, unions, TypeVars).
    """
    tp = strip_optional(tp)
    if tp is Any or tp is object:
        return None
    origin = get_origin(tp)
    if origin is not None:
        return origin if isinstance(origin, type) else None
    if isinstance(tp, type):
        return tp
    return None


def is_generic_target(tp: Any) -> bool:
    """Whether a deserialization target leaves the concrete type open."""
    return tp is None or tp is Any or tp is object


def is_record_contract(tp: Any) -> bool:
    """Whether tp is Record or a Record subclass (not a generic alias)."""
    return isinstance(tp, type) and get_origin(tp) is None and issubclass(tp, Record)
