"""
Runs named, table-driven test cases through a function and compares what it returns with what was expected

The function under test returns a ``(result, err)`` pair, where `err` is an exception instance or None. An exception
raised by the function (rather than returned) is a panic, and only passes when the case says it should panic.

Usage::

    def test_split():
        def fn(s):
            return s.split(','), None

        Trial(fn, {
            'one value': Case(input='a', expected=['a']),
            'many values': Case(input='a,b', expected=['a', 'b']),
        }).test()
"""

import logging
import os
import traceback
import warnings
from dataclasses import dataclass
from .comparison import equal
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Callable, Dict, List, Optional, Tuple
    from typing_extensions import Self

    # Returns (result, err)
    TestFunc = Callable[..., Tuple[Any, Optional[BaseException]]]
    # Returns (equal, differences)
    CompareFunc = Callable[[Any, Any], Tuple[bool, str]]


logger = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_RED, _RESET = '\033[31m', '\033[39m'


class Args:
    """Positional and keyword arguments to splat into the function under test, for use as a :class:`Case` input"""

    def __init__(self, *args: 'Any', **kwargs: 'Any') -> 'None':
        self.args, self.kwargs = args, kwargs

    def __eq__(self, other: 'Any') -> 'bool':
        return isinstance(other, Args) and self.args == other.args and self.kwargs == other.kwargs

    def __repr__(self) -> 'str':
        params = [repr(a) for a in self.args] + ['%s=%r' % kv for kv in self.kwargs.items()]
        return 'Args(%s)' % ', '.join(params)


@dataclass
class Case:
    """One scenario of a trial

    Args:
        input (Any): the argument passed to the function under test. Wrap it in :class:`Args` to pass several.
        expected (Any): the result the function should return. Only checked when no error is expected.
        should_err (bool): if True, the function must return an error
        expected_err (Optional[BaseException]): the error the function must return. Matches when its message is part of
            the returned error's message, or by exact type when wrapped with :func:`err_type`
        should_panic (bool): if True, the function must raise
    """
    input: 'Any' = None
    expected: 'Any' = None
    should_err: 'bool' = False
    expected_err: 'Optional[BaseException]' = None
    should_panic: 'bool' = False


@dataclass
class CaseResult:
    """Outcome of running a single case"""
    name: 'str'
    success: 'bool'
    message: 'str'


class TrialFailure(AssertionError):
    """Raised when one or more cases of a trial fail"""


class _ErrCheck(Exception):
    """An expected error that matches by type instead of by message"""

    def __init__(self, err: 'BaseException') -> 'None':
        super().__init__(str(err))
        self.err = err


def err_type(err: 'BaseException') -> 'BaseException':
    """Wraps an error for use as :attr:`Case.expected_err`, so that any error of exactly the same type matches"""
    return _ErrCheck(err)


def is_expected_error(actual: 'BaseException', expected: 'BaseException') -> 'bool':
    if isinstance(expected, _ErrCheck):
        return type(actual) is type(expected.err)
    return str(expected) in str(actual)


class Trial:
    """
    A set of named cases run through one function.

    Results are compared with :func:`~pytrial.comparison.equality.equal` unless another comparer is given, eg:
        ``Trial(fn, cases).comparer(contains)``

    Args:
        fn (TestFunc): the function under test, returning (result, err)
        cases (Optional[Dict[str, Case]]): the cases, by name
        comparer (CompareFunc): compares (actual, expected) and returns (equal, differences)
        filter_traceback (bool): if True, frames from inside this package are left out of panic tracebacks
        color (bool): if True, failure messages are colored red
    """

    def __init__(self, fn: 'TestFunc', cases: 'Optional[Dict[str, Case]]' = None, *, comparer: 'CompareFunc' = equal,
        filter_traceback: 'bool' = True, color: 'bool' = True) -> 'None':
        self.cases = {} if cases is None else cases
        self.fn = fn
        self.compare_fn = comparer
        self.filter_traceback = filter_traceback
        self.color = color

    def comparer(self, fn: 'CompareFunc') -> 'Self':
        """Overrides the comparison function. Returns this trial"""
        self.compare_fn = fn
        return self

    def equal_fn(self, fn: 'CompareFunc') -> 'Self':
        """Deprecated, use :meth:`comparer`"""
        warnings.warn("Trial.equal_fn() is deprecated, use Trial.comparer()", DeprecationWarning, stacklevel=2)
        return self.comparer(fn)

    def names(self) -> 'List[str]':
        """The case names, for use with ``pytest.mark.parametrize`` alongside :meth:`run`"""
        return list(self.cases)

    def test(self) -> 'List[CaseResult]':
        """Runs every case. Raises a TrialFailure listing every failed case, otherwise returns the results"""
        results = [self.run_case(name, case) for name, case in self.cases.items()]

        failures = []
        for r in results:
            if r.success:
                logger.info(r.message)
            else:
                logger.error(r.message)
                failures.append(self._paint(r.message))

        if failures:
            raise TrialFailure('\n'.join(failures))
        return results

    def run(self, name: 'str') -> 'CaseResult':
        """Runs a single case by name, raising a TrialFailure if it fails. The message leaves out the case name, as the
        test id already shows it"""
        r = self.run_case(name, self.cases[name])
        if r.success:
            logger.info(r.message)
            return r

        logger.error(r.message)
        s = r.message.replace('"%s"' % name, '', 1).replace('FAIL:', '', 1)
        raise TrialFailure(self._paint(s.lstrip(' \n')))

    def run_case(self, name: 'str', case: 'Case') -> 'CaseResult':
        """Runs one case and returns its result without raising"""
        try:
            ret = self._call(case)
        except Exception as e:
            if case.should_panic:
                return _pass('PASS: "%s"', name)
            return _fail('PANIC: "%s" %s\n%s', name, e, self._format_traceback(e))

        if case.should_panic:
            return _fail('FAIL: "%s" did not panic', name)

        if not isinstance(ret, tuple) or len(ret) != 2:
            return _fail('FAIL: "%s" test function must return (result, err), got %r', name, ret)
        result, err = ret

        if (case.should_err or case.expected_err is not None) and err is None:
            return _fail('FAIL: "%s" should error', name)
        elif not case.should_err and err is not None and case.expected_err is None:
            return _fail("FAIL: \"%s\" unexpected error '%s'", name, err)
        elif case.expected_err is not None and not is_expected_error(err, case.expected_err):
            return _fail('FAIL: "%s" error "%s" does not match expected "%s"', name, err, case.expected_err)
        elif not case.should_err and case.expected_err is None:
            checked, differences = self.compare_fn(result, case.expected)
            if not checked:
                return _fail('FAIL: "%s" \n%s', name, differences)
        return _pass('PASS: "%s"', name)

    def _call(self, case: 'Case') -> 'Any':
        if isinstance(case.input, Args):
            return self.fn(*case.input.args, **case.input.kwargs)
        return self.fn(case.input)

    def _format_traceback(self, e: 'BaseException') -> 'str':
        frames = traceback.extract_tb(e.__traceback__)
        if self.filter_traceback:
            frames = [f for f in frames if not f.filename.startswith(_PACKAGE_DIR)]
        return ''.join(traceback.format_list(frames)) + ''.join(traceback.format_exception_only(type(e), e))

    def _paint(self, message: 'str') -> 'str':
        return _RED + message + _RESET if self.color else message


def _pass(format: 'str', *args: 'Any') -> 'CaseResult':
    return CaseResult(name=args[0], success=True, message=format % args)


def _fail(format: 'str', *args: 'Any') -> 'CaseResult':
    return CaseResult(name=args[0], success=False, message=format % args)
