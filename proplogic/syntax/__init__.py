r"""Syntax of propositional logic.

An abstract base class :class:`Formula` implements representations of and
methods on propositional formulas recursively built from atoms and
operators. Operators are mapped to classes as follows:

+--------------+--------------+---------------+---------------+--------------+-------------------------+-----------------------------+----------------+---------------+
| :math:`\top` | :math:`\bot` | :math:`\lnot` | :math:`\land` | :math:`\lor` | :math:`\longrightarrow` | :math:`\longleftrightarrow` | :math:`\oplus` | if-then-else  |
+--------------+--------------+---------------+---------------+--------------+-------------------------+-----------------------------+----------------+---------------+
| :class:`_T`  | :class:`_F`  | :class:`Not`  | :class:`And`  | :class:`Or`  | :class:`Implies`        | :class:`Equivalent`         | :class:`Xor`   | :class:`Ite`  |
+--------------+--------------+---------------+---------------+--------------+-------------------------+-----------------------------+----------------+---------------+

The truth values are singletons with unique instances :data:`T` and
:data:`F`. Atoms are instances of :class:`Var`, which are conveniently
obtained from :data:`VV`:

>>> P, Q = VV.get('P', 'Q')
>>> f = Implies(And(P, Not(P)), Q)
>>> f
Implies(And(P, Not(P)), Q)
>>> print(f)
P and not P --> Q
"""  # noqa

from .formula import Formula, fold  # noqa

from .atomic import RESERVED_PREFIX, Var, VariableSet, VV  # noqa

from .boolean import (BooleanFormula, Equivalent, Implies, Xor, Ite, And, Or,  # noqa
                      Not, involutive_not, _T, T, _F, F, OPERATORS)

from .wff import (Diagnostic, GrammarError, arity, check_wff, explain_wff,  # noqa
                  is_atom, is_nary, is_op, is_wff)

from .sexpr import dump, load  # noqa

from .parser import parse  # noqa


__all__ = [
    'Formula', 'Var', 'VV',

    'Equivalent', 'Implies', 'Xor', 'Ite', 'And', 'Or', 'Not', 'T', 'F',

    'Diagnostic', 'GrammarError', 'arity', 'check_wff', 'explain_wff',
    'is_atom', 'is_nary', 'is_op', 'is_wff',

    'dump', 'load', 'parse'
]
