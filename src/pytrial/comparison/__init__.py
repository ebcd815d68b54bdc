from .access import allow_private
from .contains import contains, contains_fn
from .diff import Diff, diff_equal, diff_string
from .equality import Comparer, equal
from .funcs import cmp_funcs
from .kinds import Kind, classify

__all__ = ['allow_private', 'contains', 'contains_fn', 'Diff', 'diff_equal', 'diff_string', 'Comparer',
    'equal', 'cmp_funcs', 'Kind', 'classify']
