"""
Exact structural equality, with a readable report of everything that differs

Handled kinds (see :mod:`pytrial.comparison.kinds`):
    - str (multi-line strings also get a line-by-line ndiff)
    - list, tuple (ordered, compared index by index)
    - numpy ndarray (numeric arrays with numpy.testing.assert_equal, object arrays element by element)
    - mappings (compared key by key)
    - structs (public attributes always, private attributes for every type :func:`allow_private` finds in the actual
      value, or the object's own ``equals()`` if it implements :class:`Comparer`)
    - weakrefs (compared by what they point to)
    - functions (compared by :func:`~pytrial.comparison.funcs.cmp_funcs`)
    - falls back on built-in __eq__

Types are strict: values of different types are never equal (so ``1 != 1.0`` and ``True != 1``).
"""

import difflib
import numpy as np
from .access import allow_private
from .diff import Diff
from .funcs import cmp_funcs
from .kinds import Kind, classify, deref, struct_fields
from typing import Any, Protocol, Tuple, runtime_checkable
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Callable, Dict, Set


# Longest repr() shown for a single value in a diff
MAX_REPR_LEN = 1000


@runtime_checkable
class Comparer(Protocol):
    """An object that checks its own equality and describes the differences it finds"""

    def equals(self, other: Any) -> Tuple[bool, str]:
        ...


def equal(actual: 'Any', expected: 'Any') -> 'Tuple[bool, str]':
    """Determines whether `actual` and `expected` are structurally equal, including private attributes

    Args:
        actual (Any): the value that was produced
        expected (Any): the value that was expected

    Returns:
        Tuple[bool, str]: whether the values are equal, and the differences between them ('' if equal). Each
            difference is a path into the values followed by a '-:' line for `actual` and a '+:' line for `expected`
    """
    grants = set(allow_private(actual))
    d = Diff()
    _compare(actual, expected, type(actual).__name__, grants, d)
    return d.equal(), str(d)


def _compare(a: 'Any', b: 'Any', path: 'str', grants: 'Set[type]', d: 'Diff') -> 'None':
    """Adds every difference between a and b to d"""
    if a is b:
        return
    if type(a) is not type(b):
        d.errorf(_divergence(path, a, b, 'type mismatch %s != %s' % (type(a).__name__, type(b).__name__)))
        return
    _KIND_COMPARERS.get(classify(a), _compare_other)(a, b, path, grants, d)


def _compare_other(a, b, path, grants, d):
    try:
        checked = a == b
        if not isinstance(checked, bool):
            checked = bool(np.all(checked))
    except Exception as e:
        d.errorf(_divergence(path, a, b, 'could not compare using built-in __eq__: %s' % e))
        return
    if not checked:
        d.errorf(_divergence(path, a, b))


def _compare_string(a, b, path, grants, d):
    if a == b:
        return
    message = _divergence(path, a, b)
    if '\n' in a or '\n' in b:
        message += '\n' + '\n'.join('\t' + ln for ln in difflib.ndiff(a.splitlines(), b.splitlines()))
    d.errorf(message)


def _compare_sequence(a, b, path, grants, d):
    if isinstance(a, np.ndarray):
        _compare_ndarray(a, b, path, grants, d)
        return

    if len(a) != len(b):
        d.errorf(_divergence(path, a, b, 'different lengths: %d != %d' % (len(a), len(b))))
    for i, (_checking_a, _checking_b) in enumerate(zip(a, b)):
        _compare(_checking_a, _checking_b, '%s[%d]' % (path, i), grants, d)


def _compare_ndarray(a, b, path, grants, d):
    if a.shape != b.shape:
        d.errorf(_divergence(path, a, b, 'different shapes: %s != %s' % (a.shape, b.shape)))
        return

    if a.dtype == object or b.dtype == object:
        for index in np.ndindex(a.shape):
            _compare(a[index], b[index], '%s[%s]' % (path, ', '.join(str(i) for i in index)), grants, d)
        return

    try:
        np.testing.assert_equal(a, b)
    except AssertionError as e:
        d.errorf(_divergence(path, a, b, 'numpy assert_equal found discrepancies:\n%s' % e))


def _compare_map(a, b, path, grants, d):
    for k in a:
        if k not in b:
            d.errorf('%s[%r]: key only in actual\n\t-: %s' % (path, k, _limit_str(a[k])))
            continue
        _compare(a[k], b[k], '%s[%r]' % (path, k), grants, d)

    for k in b:
        if k not in a:
            d.errorf('%s[%r]: key only in expected\n\t+: %s' % (path, k, _limit_str(b[k])))


def _compare_struct(a, b, path, grants, d):
    if isinstance(a, Comparer):
        checked, message = a.equals(b)
        if not checked:
            d.errorf(_divergence(path, a, b, message))
        return

    if type(a) not in grants:
        # Reached through references or private containers the first walk skipped
        grants.update(allow_private(a))
    private = type(a) in grants
    fields_a = dict(struct_fields(a, private=private))
    fields_b = dict(struct_fields(b, private=private))

    for name, value in fields_a.items():
        if name not in fields_b:
            d.errorf('%s.%s: field only in actual\n\t-: %s' % (path, name, _limit_str(value)))
            continue
        _compare(value, fields_b[name], '%s.%s' % (path, name), grants, d)

    for name, value in fields_b.items():
        if name not in fields_a:
            d.errorf('%s.%s: field only in expected\n\t+: %s' % (path, name, _limit_str(value)))


def _compare_pointer(a, b, path, grants, d):
    ref_a, ref_b = deref(a), deref(b)
    if ref_a is None and ref_b is None:
        return
    if ref_a is None or ref_b is None:
        d.errorf(_divergence(path, ref_a, ref_b, 'dead reference'))
        return
    _compare(ref_a, ref_b, path + '()', grants, d)


def _compare_function(a, b, path, grants, d):
    checked, message = cmp_funcs(a, b)
    if not checked:
        d.errorf(_divergence(path, a, b, message))


_KIND_COMPARERS: 'Dict[Kind, Callable]' = {
    Kind.STRING: _compare_string,
    Kind.SLICE: _compare_sequence,
    Kind.ARRAY: _compare_sequence,
    Kind.MAP: _compare_map,
    Kind.STRUCT: _compare_struct,
    Kind.POINTER: _compare_pointer,
    Kind.FUNCTION: _compare_function,
}


def _divergence(path, a, b, message=None):
    """One difference: the path, an optional note, then the actual and expected values"""
    header = '%s:' % path if message is None else '%s: %s' % (path, message)
    return '%s\n\t-: %s\n\t+: %s' % (header, _limit_str(a), _limit_str(b))


def _limit_str(a, limit=None):
    limit = MAX_REPR_LEN if limit is None else limit
    a_str = repr(a)
    return a_str if len(a_str) < limit else (a_str[:limit] + '...')
