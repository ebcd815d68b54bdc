"""
Tests for the pytrial.comparison.diff file.
"""

from pytrial.comparison import Diff, diff_equal, diff_string


def _make(*minus, plus=(), msgs=()):
    d = Diff()
    for v in minus:
        d.missing(v)
    for v in plus:
        d.extra(v)
    for m in msgs:
        d.errorf(m)
    return d


def test_empty():
    assert Diff().equal()
    assert str(Diff()) == ''
    assert diff_equal(None)
    assert diff_string(None) == ''
    assert diff_equal(Diff())


def test_not_equal():
    assert not _make(1).equal()
    assert not _make(plus=[1]).equal()
    assert not _make(msgs=['bad']).equal()
    assert not diff_equal(_make(1))


def test_render_extra_and_missing():
    d = _make('a', 'b', plus=[1, 2])
    assert str(d) == '+1\n+2\n-a\n-b\n'
    assert diff_string(d) == str(d)


def test_messages_take_priority():
    d = _make('a', plus=[1])
    d.errorf('bad value %d', 3)
    d.errorf('worse value %s', 'x')
    assert str(d) == 'bad value 3\nworse value x\n'


def test_errorf():
    d = Diff()
    assert d.errorf('100%') is d
    assert str(d) == '100%\n'


def test_append():
    parent = _make('a')
    parent.append(None)
    assert parent.minus == ['a']

    parent.append(_make('b', 'c', plus=[1], msgs=['m']))
    assert parent.minus == ['a', 'b', 'c']
    assert parent.plus == [1]
    assert parent.msgs == ['m']


def test_append_associative():
    """(a + b) + c == a + (b + c), in the order things were found"""
    left = _make(1, plus=['x'])
    left.append(_make(2, plus=['y']))
    left.append(_make(3, plus=['z']))

    right_child = _make(2, plus=['y'])
    right_child.append(_make(3, plus=['z']))
    right = _make(1, plus=['x'])
    right.append(right_child)

    assert left.minus == right.minus == [1, 2, 3]
    assert left.plus == right.plus == ['x', 'y', 'z']
    assert str(left) == str(right)
