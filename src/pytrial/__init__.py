__doc__ = """Table-driven test cases with structural equality and containment comparisons."""

from .comparison import Comparer, Diff, Kind, allow_private, classify, cmp_funcs, contains, contains_fn, equal
from .trial import Args, Case, CaseResult, Trial, TrialFailure, err_type

__all__ = ['Comparer', 'Diff', 'Kind', 'allow_private', 'classify', 'cmp_funcs', 'contains', 'contains_fn', 'equal',
    'Args', 'Case', 'CaseResult', 'Trial', 'TrialFailure', 'err_type']
