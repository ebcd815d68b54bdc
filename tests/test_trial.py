"""
Tests for the pytrial.trial file.
"""

import logging
import os
import pytest
import pytrial.trial
from pytrial import Args, Case, Trial, TrialFailure, contains, equal, err_type


def _divide(a, b):
    if b == 0:
        return None, ZeroDivisionError('division by zero')
    return a / b, None


def _split(s):
    return s.split(','), None


def _explode(_):
    raise ValueError('boom')


def _not_a_pair(_):
    return 5


_SPLIT_TRIAL = Trial(_split, {
    'single value': Case(input='a', expected=['a']),
    'many values': Case(input='a,b,c', expected=['a', 'b', 'c']),
    'empty': Case(input='', expected=['']),
})


@pytest.mark.parametrize('name', _SPLIT_TRIAL.names())
def test_split_subtests(name):
    assert _SPLIT_TRIAL.run(name).success


def test_all_cases_pass():
    results = Trial(_divide, {
        'half': Case(input=Args(1, 2), expected=0.5),
        'keyword args': Case(input=Args(3, b=2), expected=1.5),
        'should error': Case(input=Args(1, 0), should_err=True),
        'error message': Case(input=Args(1, 0), expected_err=ValueError('by zero')),
        'error type': Case(input=Args(1, 0), expected_err=err_type(ZeroDivisionError())),
    }).test()

    assert len(results) == 5
    assert all(r.success for r in results)
    assert [r.name for r in results] == ['half', 'keyword args', 'should error', 'error message', 'error type']


def test_empty_trial():
    assert Trial(_divide).test() == []


def test_comparison_failure():
    r = Trial(_divide).run_case('wrong', Case(input=Args(1, 2), expected=1.0))
    assert r.success is False
    assert r.message == 'FAIL: "wrong" \nfloat:\n\t-: 0.5\n\t+: 1.0\n'


def test_error_failures():
    trial = Trial(_divide)

    r = trial.run_case('x', Case(input=Args(1, 2), should_err=True))
    assert (r.success, r.message) == (False, 'FAIL: "x" should error')

    r = trial.run_case('x', Case(input=Args(1, 2), expected_err=ZeroDivisionError()))
    assert (r.success, r.message) == (False, 'FAIL: "x" should error')

    r = trial.run_case('x', Case(input=Args(1, 0), expected=1))
    assert (r.success, r.message) == (False, "FAIL: \"x\" unexpected error 'division by zero'")

    r = trial.run_case('x', Case(input=Args(1, 0), expected_err=ValueError('not this')))
    assert (r.success, r.message) == (False, 'FAIL: "x" error "division by zero" does not match expected "not this"')

    r = trial.run_case('x', Case(input=Args(1, 0), expected_err=err_type(ValueError())))
    assert r.success is False


def test_panics():
    trial = Trial(_explode)

    assert trial.run_case('x', Case(should_panic=True)).success

    r = trial.run_case('x', Case())
    assert r.success is False
    assert r.message.startswith('PANIC: "x" boom\n')
    assert 'ValueError: boom' in r.message
    assert 'in _explode' in r.message

    r = Trial(_divide).run_case('x', Case(input=Args(1, 2), expected=0.5, should_panic=True))
    assert (r.success, r.message) == (False, 'FAIL: "x" did not panic')


def test_traceback_filtering():
    package_dir = os.path.dirname(os.path.abspath(pytrial.trial.__file__))

    r = Trial(_explode).run_case('x', Case())
    assert package_dir not in r.message

    r = Trial(_explode, filter_traceback=False).run_case('x', Case())
    assert package_dir in r.message


def test_bad_return_value():
    r = Trial(_not_a_pair).run_case('x', Case())
    assert (r.success, r.message) == (False, 'FAIL: "x" test function must return (result, err), got 5')


def test_test_raises():
    trial = Trial(_divide, {
        'good': Case(input=Args(1, 2), expected=0.5),
        'bad': Case(input=Args(1, 2), expected=2.0),
    })

    with pytest.raises(TrialFailure) as e:
        trial.test()
    assert isinstance(e.value, AssertionError)
    assert str(e.value).startswith('\033[31mFAIL: "bad"')
    assert 'good' not in str(e.value)

    trial = Trial(_divide, {'bad': Case(input=Args(1, 2), expected=2.0)}, color=False)
    with pytest.raises(TrialFailure, match='^FAIL: "bad"'):
        trial.test()


def test_run():
    trial = Trial(_divide, {'bad': Case(input=Args(1, 2), expected=1.0)}, color=False)

    with pytest.raises(TrialFailure) as e:
        trial.run('bad')
    assert str(e.value) == 'float:\n\t-: 0.5\n\t+: 1.0\n'

    with pytest.raises(KeyError):
        trial.run('missing')


def test_comparer():
    trial = Trial(_split, {'subset': Case(input='a,b,c', expected=['c', 'a'])})
    with pytest.raises(TrialFailure):
        trial.test()

    assert trial.comparer(contains) is trial
    assert trial.test()[0].success

    assert Trial(_split, trial.cases, comparer=contains).test()[0].success


def test_equal_fn_deprecated():
    trial = Trial(_split)
    with pytest.warns(DeprecationWarning):
        assert trial.equal_fn(contains) is trial
    assert trial.compare_fn is contains
    assert Trial(_split).compare_fn is equal


def test_logging(caplog):
    caplog.set_level(logging.INFO, logger='pytrial.trial')
    Trial(_divide, {'half': Case(input=Args(1, 2), expected=0.5)}).test()
    assert 'PASS: "half"' in caplog.text


def test_args():
    assert Args(1, 2, c=3) == Args(1, 2, c=3)
    assert Args(1) != Args(2)
    assert repr(Args(1, 'a', c=3)) == "Args(1, 'a', c=3)"
