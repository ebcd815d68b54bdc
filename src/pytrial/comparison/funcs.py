"""
Compares functions by the code they run
"""

import functools
from .kinds import Kind, classify
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Callable, Tuple


def cmp_funcs(x: 'Any', y: 'Any') -> 'Tuple[bool, str]':
    """Determines if x is the same function as y.

    Bound methods are compared by the function they wrap (so `a.f` and `b.f` are the same function) and partials by
    the callable they wrap. Two closures made from the same `def` share their code, and are the same function.

    Args:
        x (Any): a function, or None
        y (Any): a function, or None

    Returns:
        Tuple[bool, str]: whether the functions are the same, and a message describing why not
    """
    if x is None or y is None:
        if x is y:
            return True, ''
        return False, '%r != %r' % (x, y)

    if classify(x) is not Kind.FUNCTION or classify(y) is not Kind.FUNCTION:
        return False, 'can only compare functions x=%s(%r) y=%s(%r)' % (type(x).__name__, x, type(y).__name__, y)

    addr_x, addr_y = code_address(x), code_address(y)
    if addr_x == addr_y:
        return True, ''
    return False, 'funcs not equal 0x%x != 0x%x' % (addr_y, addr_x)


def code_address(func: 'Callable') -> 'int':
    """Returns an id for the code behind `func`"""
    while True:
        if isinstance(func, functools.partial):
            func = func.func
        elif hasattr(func, '__func__'):
            func = func.__func__
        else:
            break
    code = getattr(func, '__code__', None)
    return id(func) if code is None else id(code)
