import logging

import pytest

from proplogic import (And, F, GrammarError, Not, Or, Options,
                       PreconditionError, ResourceLimitError, T, Var, VV,
                       cnf, dnf, evaluate, explain_cnf, explain_dnf, is_cnf,
                       is_dnf, load, parse)
from proplogic.bnf import (dual, eliminate_derived, flatten, is_literal,
                           logger as bnf_logger, nnf_to_cnf, reduce_cnf, to_nnf)
from proplogic.syntax import Equivalent, Implies, Ite, Xor

from conftest import models


DERIVED = (Implies, Equivalent, Xor, Ite)


def operators(phi):
    stack = [phi]
    while stack:
        f = stack.pop()
        if not isinstance(f, Var):
            yield f.op
            stack.extend(f.args)


def is_nnf(phi):
    stack = [phi]
    while stack:
        f = stack.pop()
        if f.op in DERIVED:
            return False
        if f.op is Not:
            if not is_literal(f):
                return False
        elif not isinstance(f, Var):
            stack.extend(f.args)
    return True


class TestStages:

    def test_eliminate_derived(self, formula):
        assert not set(operators(eliminate_derived(formula))) & set(DERIVED)

    def test_to_nnf(self, formula):
        nnf = to_nnf(eliminate_derived(formula))
        assert is_nnf(nnf)
        for m in models(formula):
            assert evaluate(nnf, m) == evaluate(formula, m)

    def test_to_nnf_literals_unchanged(self):
        P = VV['P']
        assert to_nnf(Not(P)) == Not(P)
        assert to_nnf(Not(T)) == Not(T)

    def test_to_nnf_precondition(self):
        with pytest.raises(PreconditionError):
            to_nnf(parse('P | (Q >> R)'))

    def test_nnf_to_cnf(self, formula):
        nnf = to_nnf(eliminate_derived(formula))
        ucnf = nnf_to_cnf(nnf)
        assert ucnf.op is And
        assert all(clause.op is Or for clause in ucnf.args)
        for m in models(formula):
            assert evaluate(ucnf, m) == evaluate(formula, m)

    def test_nnf_to_cnf_base_cases(self):
        P = VV['P']
        assert nnf_to_cnf(P) == And(Or(P))
        assert nnf_to_cnf(Not(P)) == And(Or(Not(P)))
        assert nnf_to_cnf(T) == And(Or(T))
        assert nnf_to_cnf(Or()) == And(Or())
        assert nnf_to_cnf(And()) == And()

    def test_flatten(self, formula):
        flat = flatten(nnf_to_cnf(to_nnf(eliminate_derived(formula))))
        assert is_cnf(flat)
        assert flatten(flat) == flat
        assert flatten(formula) == flatten(flatten(formula))

    def test_flatten_wide_clause(self):
        atoms = VV.get(*(f'P{i}' for i in range(2000)))
        ucnf = nnf_to_cnf(Or(*atoms))
        assert flatten(ucnf) == And(Or(*atoms))

    def test_reduce_cnf(self):
        P, Q, R = VV.get('P', 'Q', 'R')
        assert reduce_cnf(And(Or(Not(P), Q, Not(P)), Or(Q, Not(P)))) == And(Or(Q, Not(P)))
        assert reduce_cnf(And(Or(P, Q), Or(Q, P))) == And(Or(P, Q))
        assert reduce_cnf(And(Or(P, T))) is T
        assert reduce_cnf(And()) is T
        assert reduce_cnf(And(Or(R), Or())) is F
        assert reduce_cnf(And(Or(P, Not(P)), Or(Q, F))) == And(Or(Q))

    def test_reduce_cnf_precondition(self):
        P, Q = VV.get('P', 'Q')
        with pytest.raises(PreconditionError):
            reduce_cnf(And(Or(Or(P), Q)))

    def test_dual(self):
        P, Q = VV.get('P', 'Q')
        assert dual(F) is T
        assert dual(And(Or(Not(P), Q))) == Or(And(P, Not(Q)))
        with pytest.raises(PreconditionError):
            dual(Or(P))

    def test_deep_formulas(self):
        P, Q = VV.get('P', 'Q')
        phi = P
        for _ in range(3000):
            phi = Not(phi)
        assert eliminate_derived(phi) == phi
        assert to_nnf(phi) == P
        assert to_nnf(Not(phi)) == Not(P)
        assert nnf_to_cnf(to_nnf(phi)) == And(Or(P))
        assert to_nnf(eliminate_derived(Implies(phi, Q))) == Or(Not(P), Q)
        psi = P
        for i in range(2000):
            psi = And(psi, Q) if i % 2 else Or(psi, Not(Q))
        assert eliminate_derived(psi) == psi
        assert to_nnf(psi) == psi
        ucnf = nnf_to_cnf(psi)
        assert ucnf.op is And and len(ucnf.args) == 1001
        assert reduce_cnf(flatten(ucnf)) == And(Or(P, Not(Q)), Or(Q))


class TestNormalForms:

    def test_cnf_shape(self, formula):
        result = cnf(formula)
        assert result is T or result is F or is_cnf(result)

    def test_dnf_shape(self, formula):
        result = dnf(formula)
        assert result is T or result is F or is_dnf(result)

    def test_equivalence(self, formula):
        cnf_formula, dnf_formula = cnf(formula), dnf(formula)
        for m in models(formula):
            assert evaluate(formula, m) == evaluate(cnf_formula, m) == evaluate(dnf_formula, m)

    def test_atom(self):
        assert cnf(Var('P')) == And(Or(Var('P')))

    def test_tautology(self):
        assert cnf(load(['impl', ['and', 'P', ['not', 'P']], 'Q'])) is T

    def test_contradiction(self):
        P = VV['P']
        assert cnf(parse('P & ~P')) == And(Or(P), Or(Not(P)))
        assert dnf(parse('P & ~P')) is F

    def test_dnf_of_disjunction(self):
        P, Q = VV.get('P', 'Q')
        assert dnf(Or(P, Q)) == Or(And(P), And(Q))

    def test_constants(self):
        assert cnf(T) is T and cnf(F) is F
        assert dnf(T) is T and dnf(F) is F
        assert cnf(And()) is T and cnf(Or()) is F

    def test_clause_literal_order(self):
        assert cnf(parse('Or(~Q, P, ~R, P)')) == load(['and', ['or', 'P', ['not', 'Q'], ['not', 'R']]])

    def test_no_repeated_clauses(self, formula):
        result = cnf(formula)
        if result is not T and result is not F:
            clause_sets = [frozenset(clause.args) for clause in result.args]
            assert len(clause_sets) == len(set(clause_sets))
            assert all(len(clause.args) == len(set(clause.args)) for clause in result.args)

    def test_list_representation(self):
        assert cnf(['or', 'P', 'Q']) == And(Or(*VV.get('P', 'Q')))

    def test_malformed_input(self):
        with pytest.raises(GrammarError):
            cnf(['impl', 'P'])
        with pytest.raises(GrammarError):
            dnf(And(Var('P'), Var('xor')))


class TestPredicates:

    def test_is_literal(self):
        P = VV['P']
        assert is_literal(P) and is_literal(Not(P)) and is_literal(F) and is_literal(Not(F))
        assert not is_literal(Not(Not(P)))
        assert not is_literal(And(P))

    def test_is_cnf(self):
        assert is_cnf(parse('And(Or(P, ~Q), Or(R))'))
        assert is_cnf(parse('And()'))
        assert is_cnf(parse('And(Or())'))
        assert is_cnf(T)
        assert not is_cnf(parse('And(Or(P & Q))'))
        assert not is_cnf(parse('Or(And(P))'))
        assert not is_cnf(['and', ['or', 'P']])

    def test_is_dnf(self):
        assert is_dnf(parse('Or(And(P, ~Q), And(R))'))
        assert is_dnf(F)
        assert not is_dnf(parse('And(Or(P))'))

    def test_explain(self):
        diagnostic = explain_cnf(parse('And(Or(P), Or(Q, R >> P))'))
        assert diagnostic.path == (1, 1)
        assert explain_dnf(parse('Or(And(P), And(Q, R))')) is None


class TestOptions:

    def test_defaults(self):
        options = Options()
        assert options.log_level == logging.NOTSET
        assert options.max_clauses == 65536
        assert options.max_depth is None

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            cnf(parse('P'), max_literals=3)

    def test_negative_limits(self):
        with pytest.raises(ValueError):
            Options(max_clauses=-1)
        with pytest.raises(ValueError):
            cnf(parse('P'), max_depth=-1)

    def test_max_clauses(self):
        phi = Or(*(And(*VV.get(f'P{i}', f'Q{i}')) for i in range(10)))
        with pytest.raises(ResourceLimitError):
            cnf(phi, max_clauses=1000)
        with pytest.raises(ResourceLimitError):
            dnf(Not(phi), max_clauses=1000)
        small = Or(*(And(*VV.get(f'P{i}', f'Q{i}')) for i in range(3)))
        assert len(cnf(small, max_clauses=8).args) == 8
        with pytest.raises(ResourceLimitError):
            cnf(small, max_clauses=7)
        assert len(cnf(phi, max_clauses=None, max_depth=10).args) == 1024

    def test_max_depth(self):
        phi = VV['P']
        for _ in range(30):
            phi = Not(phi)
        assert cnf(phi, max_depth=30) == And(Or(VV['P']))
        with pytest.raises(ResourceLimitError):
            cnf(phi, max_depth=29)
        assert cnf(VV['P'] ^ phi, max_depth=31) == And(Or(VV['P']), Or(Not(VV['P'])))

    def test_no_default_depth_limit(self):
        phi = VV['P']
        for _ in range(3000):
            phi = Not(phi)
        assert cnf(phi) == And(Or(VV['P']))
        assert dnf(Not(phi)) == Or(And(Not(VV['P'])))

    def test_long_chain(self):
        phi = parse(' | '.join(f'P{i % 5}' for i in range(250)))
        assert cnf(phi) == And(Or(*VV.get('P0', 'P1', 'P2', 'P3', 'P4')))
        assert dnf(phi) == Or(*(And(atom) for atom in VV.get('P0', 'P1', 'P2', 'P3', 'P4')))

    def test_log_level(self, caplog):
        level = bnf_logger.level
        bnf_logger.addHandler(caplog.handler)
        try:
            cnf(parse('(P & Q) | R'), log_level=logging.DEBUG)
        finally:
            bnf_logger.removeHandler(caplog.handler)
        assert bnf_logger.level == level
        messages = [record.getMessage() for record in caplog.records]
        assert any(message.startswith('reduce_cnf') for message in messages)
        assert any(message.startswith('finished') for message in messages)

    def test_log_level_restored_after_error(self):
        level = bnf_logger.level
        with pytest.raises(ResourceLimitError):
            cnf(parse('(P & Q) | (R & S)'), max_clauses=1, log_level=logging.CRITICAL)
        assert bnf_logger.level == level
