"""
flexrecord - Loosely-schematized records with type-directed JSON serialization

Records are named-field values backed by a plain dictionary and accessed
through typed contract accessors, while unknown fields are tolerated and
round-tripped. The codec package converts records to and from JSON using
an extensible, ordered chain of serialization strategies.
"""

from .core.binder import Binding, RecordBox
from .core.record import Record
from .core.registry import TypeRegistry
from .core.scalars import Float32, Int8, Int16, Int32, Int64
from .core.writer import RecordWriter

__version__ = "0.1.0"
__author__ = "flexrecord Team"

__all__ = [
    "Binding",
    "Float32",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Record",
    "RecordBox",
    "RecordWriter",
    "TypeRegistry",
]
