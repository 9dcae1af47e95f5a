"""The external list representation of formulas, which is used for test
fixtures and for exchange with other tools. A formula is either ``True`` or
``False``, an atom name, or a list ``[keyword, operand, ...]`` with one of
the keywords ``not``, ``and``, ``or``, ``impl``, ``equiv``, ``xor``,
``ite``. This resembles the s-expressions used in Lisp-based logic
workbenches.

>>> f = load(['impl', ['and', 'P', ['not', 'P']], 'Q'])
>>> f
Implies(And(P, Not(P)), Q)
>>> dump(f)
['impl', ['and', 'P', ['not', 'P']], 'Q']
"""

from __future__ import annotations

from typing import Any

from .atomic import Var
from .boolean import F, OPERATORS, T
from .formula import Formula
from .wff import check_wff

from ..support.tracing import trace  # noqa


def load(obj: Any, allow_reserved: bool = False) -> Formula:
    """Convert the list representation `obj` into a :class:`.Formula`. Tuples
    are accepted in place of lists, and subformulas may already be
    instances of :class:`.Formula`. Since this is where user input enters
    the system, atoms with the reserved prefix are rejected unless
    `allow_reserved` is :obj:`True`.

    >>> load(True), load('P'), load(('or', ))
    (T, P, Or())
    >>> load(['and', 'P', 'ts_2'])
    Traceback (most recent call last):
    ...
    proplogic.syntax.wff.GrammarError: reserved atom name 'ts_2' at args[1]: expected a name not starting with 'ts_', found 'ts_2'
    >>> load(['and', 'P', 'ts_2'], allow_reserved=True)
    And(P, ts_2)

    The conversion is iterative, so that there is no limit on the depth of
    `obj`.
    """
    check_wff(obj, allow_reserved)
    results: list[Formula] = []
    stack: list[tuple[Any, bool]] = [(obj, False)]
    while stack:
        f, expanded = stack.pop()
        match f:
            case bool():
                results.append(T if f else F)
            case str():
                results.append(Var(f))
            case Formula():
                results.append(f)
            case _ if not expanded:
                stack.append((f, True))
                for arg in reversed(f[1:]):
                    stack.append((arg, False))
            case _:
                n = len(f) - 1
                args = results[len(results) - n:]
                del results[len(results) - n:]
                results.append(OPERATORS[f[0]](*args))
    assert len(results) == 1, results
    return results[0]


def dump(phi: Formula) -> Any:
    """Convert `phi` into the list representation.

    >>> from proplogic import VV, Xor
    >>> P, Q = VV.get('P', 'Q')
    >>> dump(Xor(P, F))
    ['xor', 'P', False]

    .. seealso:: :meth:`.Formula.as_list` -- the underlying method
    """
    return phi.as_list()
