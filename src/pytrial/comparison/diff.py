"""
Accumulator for the differences found while comparing two values
"""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, List, Optional
    from typing_extensions import Self


class Diff:
    """
    Collects the differences between an actual (container) value and an expected (subset) value.

    A Diff with no messages, no extra values and no missing values means "no difference". None is treated the same way
        everywhere a Diff is accepted, so comparisons that succeed can just return None.
    """

    def __init__(self: 'Self') -> 'None':
        # values that are in the actual value but not in the expected one
        self.plus: 'List[Any]' = []
        # values that are in the expected value but not in the actual one
        self.minus: 'List[Any]' = []
        # additional messaging, takes priority over plus/minus when rendered
        self.msgs: 'List[str]' = []

    def errorf(self: 'Self', format: 'str', *values: 'Any') -> 'Self':
        """
        Adds a printf-style message. With no values, `format` is used as-is so text containing '%' is safe to pass.
        Returns this diff so a comparison can `return d.errorf(...)`
        """
        self.msgs.append(format % values if values else format)
        return self

    def extra(self: 'Self', value: 'Any') -> 'None':
        self.plus.append(value)

    def missing(self: 'Self', value: 'Any') -> 'None':
        self.minus.append(value)

    def equal(self: 'Self') -> 'bool':
        return len(self.plus) == 0 and len(self.minus) == 0 and len(self.msgs) == 0

    def append(self: 'Self', other: 'Optional[Diff]') -> 'None':
        """Merges the messages, extra and missing values of `other` onto the end of this diff's. None is a no-op"""
        if other is None:
            return
        self.msgs.extend(other.msgs)
        self.plus.extend(other.plus)
        self.minus.extend(other.minus)

    def __str__(self: 'Self') -> 'str':
        if self.msgs:
            return ''.join('%s\n' % m for m in self.msgs)
        return ''.join('+%s\n' % (v,) for v in self.plus) + ''.join('-%s\n' % (v,) for v in self.minus)

    def __repr__(self: 'Self') -> 'str':
        return 'Diff(plus=%r, minus=%r, msgs=%r)' % (self.plus, self.minus, self.msgs)


def diff_equal(d: 'Optional[Diff]') -> 'bool':
    return d is None or d.equal()


def diff_string(d: 'Optional[Diff]') -> 'str':
    return '' if d is None else str(d)
