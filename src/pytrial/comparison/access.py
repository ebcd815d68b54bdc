"""
Works out which struct types get their private (underscore) attributes compared

A plain ``==`` on most objects never looks inside them, and the exact comparator only looks at the public attributes of
types it has not been told about. :func:`allow_private` walks a value and returns every struct type found in it, so
that :func:`~pytrial.comparison.equality.equal` can compare those types' private attributes too.

Private attributes and referenced structs are never walked into. They contribute what a blank value of their type
would: a blank struct has the struct types it declares (non-optional annotations) and nothing else, and blank
containers are empty. Public attributes, mapping values and sequence elements are walked live.

NOTE: there is no cycle detection. A class that declares a non-optional field of its own type (eg: ``child: 'Node'``),
or a cycle of live values through public containers, recurses until Python raises a RecursionError.
"""

import logging
import typing
import numpy as np
from .kinds import Kind, classify, declared_fields, deref, is_private, is_struct, is_struct_type, struct_fields
from .pytypes import ReferenceType
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, List


logger = logging.getLogger(__name__)


def allow_private(value: 'Any') -> 'List[type]':
    """Returns every struct type in `value` whose private attributes should be compared.

    Args:
        value (Any): the value to walk. It is never modified.

    Returns:
        List[type]: the granted types in the order they were found. A type is listed once per time it was found.
    """
    grants = []
    kind = classify(value)

    if kind is Kind.POINTER:
        value = deref(value)
        if value is None or not is_struct(value):
            return grants
        kind = Kind.STRUCT

    if kind is Kind.STRUCT:
        grants.append(type(value))
        logger.debug("granting private access to %s", type(value).__qualname__)
        annotations = dict(declared_fields(type(value)))

        for name, field_value in struct_fields(value):
            referent = _struct_referent(field_value)
            if referent is not None:
                grants.extend(allow_private_type(type(referent)))
            elif is_private(name):
                grants.extend(allow_private_type(_blank_type(annotations.get(name), field_value)))
            else:
                grants.extend(allow_private(field_value))

    elif kind is Kind.MAP:
        for key in value:
            grants.extend(allow_private(value[key]))

    elif kind in (Kind.SLICE, Kind.ARRAY):
        # Numeric arrays can't hold structs
        if isinstance(value, np.ndarray) and value.dtype != object:
            return grants
        for element in value:
            grants.extend(allow_private(element))

    return grants


def allow_private_type(cls: 'Any') -> 'List[type]':
    """Returns the struct types a blank value of `cls` holds: `cls` itself (if it is a struct type) followed by those of
    every field it declares as a plain struct class. Optional and union fields would be None when blank, so they are
    skipped."""
    grants = []
    if not is_struct_type(cls):
        return grants

    grants.append(cls)
    for _, field_type in declared_fields(cls):
        if isinstance(field_type, type):
            grants.extend(allow_private_type(field_type))
    return grants


def _struct_referent(value: 'Any') -> 'Any':
    """Returns the struct a field refers to (directly or through a live weakref), or None"""
    if isinstance(value, ReferenceType):
        value = deref(value)
    return value if value is not None and is_struct(value) else None


def _blank_type(annotation: 'Any', value: 'Any') -> 'Any':
    """The type a private field is walked as: its declared class if it has a plain one, else the type of its value"""
    if isinstance(annotation, type) and typing.get_origin(annotation) is None:
        return annotation
    return type(value)
