"""Cross-check of the normal forms against :mod:`sympy.logic`, which is
independent of the rewrite pipeline in :mod:`proplogic.bnf`.
"""

import pytest

from proplogic import F, Formula, T, Var, cnf, dnf, is_cnf, is_dnf
from proplogic.syntax import And, Equivalent, Implies, Ite, Not, Or, Xor

sympy = pytest.importorskip('sympy')
boolalg = pytest.importorskip('sympy.logic.boolalg')
inference = pytest.importorskip('sympy.logic.inference')


def to_sympy(phi: Formula):
    match phi:
        case Var(name=name):
            return sympy.Symbol(name)
        case And(args=args):
            return boolalg.And(*(to_sympy(arg) for arg in args))
        case Or(args=args):
            return boolalg.Or(*(to_sympy(arg) for arg in args))
        case Not(arg=arg):
            return boolalg.Not(to_sympy(arg))
        case Implies(lhs=lhs, rhs=rhs):
            return boolalg.Implies(to_sympy(lhs), to_sympy(rhs))
        case Equivalent(lhs=lhs, rhs=rhs):
            return boolalg.Equivalent(to_sympy(lhs), to_sympy(rhs))
        case Xor(lhs=lhs, rhs=rhs):
            return boolalg.Xor(to_sympy(lhs), to_sympy(rhs))
        case Ite(cond=cond, then_=then_, else_=else_):
            return boolalg.ITE(to_sympy(cond), to_sympy(then_), to_sympy(else_))
        case _ if phi is T:
            return boolalg.true
        case _ if phi is F:
            return boolalg.false
        case _:
            assert False, phi


def equivalent(phi: Formula, psi: Formula) -> bool:
    return inference.satisfiable(boolalg.Xor(to_sympy(phi), to_sympy(psi))) is False


def test_cnf(formula):
    result = cnf(formula)
    assert result is T or result is F or is_cnf(result)
    assert equivalent(formula, result)


def test_dnf(formula):
    result = dnf(formula)
    assert result is T or result is F or is_dnf(result)
    assert equivalent(formula, result)


def test_constant_results_agree_with_sympy(formula):
    result = cnf(formula)
    if result is T:
        assert inference.satisfiable(boolalg.Not(to_sympy(formula))) is False
    if result is F:
        assert inference.satisfiable(to_sympy(formula)) is False
