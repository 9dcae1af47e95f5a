__version__ = 0.1

___author___ = 'Nicolas Faroß, Thomas Sturm'
___contact___ = 'https://logic1.eu/'
___copyright__ = 'Copyright 2023, N. Faroß, T. Sturm, Germany'
___license__ = 'GPL-2.0-or-later'
___status__ = 'Prototype'

from . import syntax

from .syntax import (Formula, Var, VV, Equivalent, Implies, Xor, Ite,  # noqa
                     And, Or, Not, T, F, Diagnostic, GrammarError, is_wff,
                     explain_wff, check_wff, load, dump, parse)

from . import semantics

from .semantics import (atoms_of, evaluate, PreconditionError, Mode,  # noqa
                        TruthTable, truth_table)

from . import bnf

from .bnf import (cnf, dnf, is_cnf, is_dnf, explain_cnf, explain_dnf,  # noqa
                  Options)

from .support.excepthook import NoTraceException, ResourceLimitError  # noqa

__all__ = syntax.__all__ + [
    'atoms_of', 'evaluate', 'PreconditionError', 'Mode', 'TruthTable',
    'truth_table',

    'cnf', 'dnf', 'is_cnf', 'is_dnf', 'explain_cnf', 'explain_dnf', 'Options',

    'NoTraceException', 'ResourceLimitError'
]
