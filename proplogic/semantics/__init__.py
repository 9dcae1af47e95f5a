"""Semantics of propositional logic: models, evaluation, and truth tables.
"""

from .evaluate import atoms_of, evaluate, PreconditionError  # noqa

from .truthtable import MAX_ATOMS, Mode, RESULT, TruthTable, truth_table  # noqa


__all__ = [
    'atoms_of', 'evaluate', 'PreconditionError',

    'Mode', 'TruthTable', 'truth_table'
]
