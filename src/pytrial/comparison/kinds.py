"""
Classifies values into the kinds the comparators know how to walk

Kinds:
    - STRING: str
    - SLICE: list
    - ARRAY: tuple, numpy ndarray
    - MAP: any Mapping
    - POINTER: weakref.ref (a dead reference is treated as nil)
    - FUNCTION: functions, methods, builtins, functools.partial
    - STRUCT: instances holding their own attributes (plain classes, slotted classes, dataclasses)
    - OTHER: None, numbers, numpy scalars, bytes-likes, sets, enums, and anything else

Every comparator branch is picked from the result of :func:`classify`, so no other module should need to do its own
type inspection.
"""

import dataclasses
import typing
import numpy as np
from collections.abc import Mapping
from enum import Enum, unique as enum_unique
from .pytypes import FunctionTypes, NonStructTypes, ReferenceType, SingletonObjects
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, List, Optional, Tuple


# Special object for getattr() on slots that were never assigned
_UNSET = object()


@enum_unique
class Kind(Enum):
    STRING = 'string'
    SLICE = 'slice'
    ARRAY = 'array'
    MAP = 'map'
    STRUCT = 'struct'
    POINTER = 'pointer'
    FUNCTION = 'function'
    OTHER = 'other'


def classify(value: 'Any') -> 'Kind':
    """Returns the :class:`Kind` of the given value. Never raises; nil and unknown values are ``Kind.OTHER``"""
    if any(value is x for x in SingletonObjects):
        return Kind.OTHER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, list):
        return Kind.SLICE
    if isinstance(value, (tuple, np.ndarray)):
        return Kind.ARRAY
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, ReferenceType):
        return Kind.POINTER
    if isinstance(value, FunctionTypes):
        return Kind.FUNCTION
    if is_struct(value):
        return Kind.STRUCT
    return Kind.OTHER


def is_sequence(value: 'Any') -> 'bool':
    return classify(value) in (Kind.SLICE, Kind.ARRAY)


def is_struct_type(cls: 'Any') -> 'bool':
    """True if instances of `cls` are compared field by field"""
    if not isinstance(cls, type) or typing.get_origin(cls) is not None:
        return False
    if issubclass(cls, NonStructTypes + (str, list, tuple, Mapping, Enum, BaseException, np.ndarray, np.generic)):
        return False
    if issubclass(cls, FunctionTypes + (ReferenceType,)):
        return False
    return cls.__module__ != 'builtins'


def is_struct(value: 'Any') -> 'bool':
    if isinstance(value, type) or not is_struct_type(type(value)):
        return False
    return hasattr(value, '__dict__') or bool(_slot_names(type(value)))


def is_private(name: 'str') -> 'bool':
    return name.startswith('_')


def deref(ref: 'Any') -> 'Optional[Any]':
    """Returns the object a weak reference points to, or None if the reference is dead"""
    return ref()


def struct_fields(value: 'Any', private: 'bool' = True) -> 'List[Tuple[str, Any]]':
    """Returns the (name, value) pairs of every field of a struct value, in declaration order

    Dataclass fields come first (in the order they were declared), then any other instance attributes in the order
    they were assigned, then slots from the base class down. Slots that were never assigned are skipped.

    Args:
        value (Any): the struct value
        private (bool): if False, then fields whose names start with an underscore are left out. Defaults to True.

    Returns:
        List[Tuple[str, Any]]: the fields
    """
    names = []
    if dataclasses.is_dataclass(value):
        names.extend(f.name for f in dataclasses.fields(value))
    names.extend(n for n in getattr(value, '__dict__', {}) if n not in names)
    names.extend(n for n in _slot_names(type(value)) if n not in names)

    ret = []
    for name in names:
        if not private and is_private(name):
            continue
        field_value = getattr(value, name, _UNSET)
        if field_value is _UNSET:
            continue
        ret.append((name, field_value))
    return ret


def declared_fields(cls: 'type') -> 'List[Tuple[str, Any]]':
    """Returns the (name, annotated type) pairs a class declares, base classes first. ClassVars are left out.

    Forward references that cannot be resolved make the whole class fall back on its raw annotations, where any
    string annotation simply will not match a type later on.
    """
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = {}
        for base in reversed(cls.__mro__):
            hints.update(base.__dict__.get('__annotations__', {}))
    return [(n, t) for n, t in hints.items() if typing.get_origin(t) is not typing.ClassVar and t is not typing.ClassVar]


def _slot_names(cls: 'type') -> 'List[str]':
    names = []
    for base in reversed(cls.__mro__):
        slots = base.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ('__dict__', '__weakref__'):
                continue
            # Private slots are stored under their mangled name
            if name.startswith('__') and not name.endswith('__'):
                name = '_%s%s' % (base.__name__.lstrip('_'), name)
            if name not in names:
                names.append(name)
    return names
