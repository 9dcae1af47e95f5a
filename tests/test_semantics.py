import logging

import pytest

from proplogic import (And, Implies, Mode, Not, Or, PreconditionError,
                       ResourceLimitError, T, F, TruthTable, VV, Xor, atoms_of,
                       evaluate, load, parse, truth_table)
from proplogic.semantics import MAX_ATOMS
from proplogic.semantics.truthtable import logger as truth_table_logger

from conftest import models


class TestAtoms:

    def test_sorted_without_duplicates(self):
        assert atoms_of(load(['and', 'Q', ['or', 'P', 'Q'], ['not', 'B2']])) == ['B2', 'P', 'Q']

    def test_constants_and_operators_are_ignored(self):
        assert atoms_of(load(['or', True, ['and']])) == []

    def test_occurrences_left_to_right(self):
        P, Q = VV.get('P', 'Q')
        assert [atom.name for atom in Or(Q, And(P, Q)).atoms()] == ['Q', 'P', 'Q']

    def test_deep_formula(self):
        phi = VV['P']
        for _ in range(5000):
            phi = Not(phi)
        assert atoms_of(phi) == ['P']
        assert phi.depth() == 5000


class TestEvaluate:

    def test_operators(self):
        P, Q, R = VV.get('P', 'Q', 'R')
        m = {'P': True, 'Q': False, 'R': True}
        assert evaluate(T, m) is True
        assert evaluate(F, m) is False
        assert evaluate(And(), m) is True
        assert evaluate(Or(), m) is False
        assert evaluate(P & R & ~Q, m) is True
        assert evaluate(Implies(P, Q), m) is False
        assert evaluate(Implies(Q, P), m) is True
        assert evaluate(Xor(P, R), m) is False
        assert evaluate(parse('P == ~Q'), m) is True
        assert evaluate(parse('Ite(Q, F, R)'), m) is True

    def test_atoms_as_keys(self):
        P, Q = VV.get('P', 'Q')
        assert evaluate(P | Q, {P: False, Q: True}) is True

    def test_missing_atoms(self):
        with pytest.raises(PreconditionError) as exc_info:
            evaluate(parse('P & (Q | R)'), {'Q': True})
        assert exc_info.value.missing == ['P', 'R']

    def test_extra_atoms_are_ignored(self):
        assert evaluate(parse('~P'), {'P': False, 'Z': True}) is True

    def test_deep_formula(self):
        phi = VV['P']
        for _ in range(3001):
            phi = Not(phi)
        assert evaluate(phi, {'P': True}) is False
        assert evaluate(Or(phi, VV['Q']), {'P': False, 'Q': False}) is True

    def test_derived_operators(self, formula):
        from proplogic.bnf import eliminate_derived
        eliminated = eliminate_derived(formula)
        for m in models(formula):
            assert evaluate(formula, m) == evaluate(eliminated, m)


class TestTruthTable:

    def test_conjunction(self):
        P, Q = VV.get('P', 'Q')
        tt = truth_table(And(P, Q))
        assert isinstance(tt, TruthTable)
        assert tt.header == ('P', 'Q', 'result')
        assert tt.rows == ((True, True, True),
                           (True, False, False),
                           (False, True, False),
                           (False, False, False))

    def test_size(self, formula):
        n = len(atoms_of(formula))
        tt = truth_table(formula)
        assert len(tt.rows) == 2 ** n
        assert all(len(row) == n + 1 for row in tt.rows)

    def test_rows_agree_with_evaluate(self, formula):
        tt = truth_table(formula)
        for row in tt.rows:
            assert evaluate(formula, dict(zip(tt.header, row[:-1]))) == row[-1]

    def test_modes(self):
        phi = parse('P | Q')
        assert truth_table(phi, Mode.TRUE_ONLY).rows \
            == ((True, True, True), (True, False, True), (False, True, True))
        assert truth_table(phi, 'false_only').rows == ((False, False, False), )
        with pytest.raises(ValueError):
            truth_table(phi, 'some')

    def test_constant(self):
        assert truth_table(T).rows == ((True, ), )
        assert truth_table(T).header == ('result', )

    def test_too_many_atoms(self):
        phi = And(*VV.get(*(f'P{i}' for i in range(MAX_ATOMS + 1))))
        with pytest.raises(ResourceLimitError, match='satisfiability'):
            truth_table(phi)

    def test_maximal_number_of_atoms(self):
        phi = Or(*VV.get(*(f'P{i}' for i in range(MAX_ATOMS))))
        assert len(truth_table(phi, Mode.FALSE_ONLY).rows) == 1

    def test_workers(self):
        phi = parse('(P >> Q) ^ (R | ~S)')
        assert truth_table(phi, workers=2).rows == truth_table(phi).rows

    def test_long_chain(self):
        phi = parse(' & '.join(f'P{i % 3}' for i in range(250)))
        assert phi.depth() == 249
        tt = truth_table(phi)
        assert tt.header == ('P0', 'P1', 'P2', 'result')
        assert [row[-1] for row in tt.rows] == [True] + 7 * [False]

    def test_workers_deep_formula(self):
        phi = VV['P'] | VV['Q']
        for _ in range(3000):
            phi = Not(phi)
        assert truth_table(phi, workers=2).rows == truth_table(phi).rows
        assert truth_table(phi, Mode.TRUE_ONLY).rows == ((True, True, True),
                                                         (True, False, True),
                                                         (False, True, True))

    def test_negative_workers(self):
        with pytest.raises(ValueError):
            truth_table(parse('P'), workers=-1)

    def test_as_dict(self):
        d = truth_table(parse('P >> Q')).as_dict()
        assert d['phi'] == ['impl', 'P', 'Q']
        assert d['header'] == ['P', 'Q', 'result']
        assert d['table'][1] == [True, False, False]

    def test_str(self):
        lines = str(truth_table(parse('Long | P'))).splitlines()
        assert lines[0] == '| Long | P | result |'
        assert lines[2] == '|    T | T |      T |'
        assert len(lines) == 6

    def test_log_level_is_restored(self, caplog):
        level = truth_table_logger.level
        truth_table_logger.addHandler(caplog.handler)
        try:
            truth_table(parse('P'), log_level=logging.DEBUG)
        finally:
            truth_table_logger.removeHandler(caplog.handler)
        assert truth_table_logger.level == level
        assert any('assignments' in record.getMessage() for record in caplog.records)
