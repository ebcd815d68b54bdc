"""
Containment: whether one value can be found inside another

    - str container: the subset is a substring. The subset may be any object with its own __str__, except bytes-like
      objects
    - list/tuple/ndarray container: every element of the subset (or the subset itself, if it is not a sequence) is
      contained by at least one element of the container. Order does not matter and each subset element is searched
      for independently, so duplicates in the subset may match the same container element.
    - mapping container: the subset is a mapping and every one of its keys is in the container, with a value contained
      by the container's value
    - anything else: exact equality, see :func:`~pytrial.comparison.equality.equal`
"""

import numpy as np
from .diff import Diff, diff_equal, diff_string
from .equality import equal
from .kinds import Kind, classify, is_sequence
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Optional, Tuple


def contains(container: 'Any', subset: 'Any') -> 'Tuple[bool, str]':
    """Determines if `subset` is a subset of `container`.

    A None subset is contained by everything.

    Args:
        container (Any): the value that was produced
        subset (Any): the part of it that was expected

    Returns:
        Tuple[bool, str]: whether `subset` was found, and the differences ('' if it was). Subset elements and keys
            that could not be found are listed with a leading '-'
    """
    if subset is None:
        return True, ''
    r = _contains(container, subset)
    return diff_equal(r), diff_string(r)


def contains_fn(container: 'Any', subset: 'Any') -> 'Tuple[bool, str]':
    """Deprecated alias for :func:`contains`"""
    return contains(container, subset)


def _contains(container: 'Any', subset: 'Any') -> 'Optional[Diff]':
    d = Diff()
    kind = classify(container)

    if kind is Kind.STRING:
        s = _text(subset)
        if s is None:
            return d.errorf('type mismatch -%s +%s', type(container).__name__, type(subset).__name__)
        if s in container:
            return None
        return d.errorf(equal(container, s)[1].rstrip('\n'))

    elif kind in (Kind.SLICE, Kind.ARRAY):
        container, subset = _plain(container), _plain(subset)
        if is_sequence(subset):
            return _is_in_sequence(container, *subset)
        return _is_in_sequence(container, subset)

    elif kind is Kind.MAP:
        if classify(subset) is not Kind.MAP:
            return d.errorf('type mismatch -%s +%s', type(container).__name__, type(subset).__name__)
        return _is_in_map(container, subset)

    is_equal, s = equal(container, subset)
    if is_equal:
        return None
    return d.errorf(s.rstrip('\n'))


def _is_in_map(parent, child):
    d = Diff()
    for key in child:
        if key not in parent:
            d.missing('%s key=%r' % (type(parent).__name__, key))
            continue
        d.append(_contains(parent[key], child[key]))
    return d


def _is_in_sequence(parent, *child):
    d = Diff()
    for v in child:
        if not any(diff_equal(_contains(p, v)) for p in parent):
            d.missing(v)
    return d


def _text(value):
    """Returns value as a str if it is one, or if its class defines its own __str__. Otherwise None"""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return None
    if type(value).__str__ is not object.__str__:
        return str(value)
    return None


def _plain(value):
    """Numeric arrays and numpy scalars as Python lists and scalars, so their elements compare equal to Python values"""
    if isinstance(value, np.ndarray) and value.dtype != object:
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value
