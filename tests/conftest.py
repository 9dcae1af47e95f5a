"""Shared fixtures for the proplogic test suite.

Formulas are given in the external list representation, so that the test
data does not depend on the parser.
"""

import itertools

import pytest

from proplogic import atoms_of, load


FORMULAS = [
    True,
    False,
    'P',
    ['not', 'P'],
    ['not', True],
    ['and'],
    ['or'],
    ['and', 'P'],
    ['or', ['or']],
    ['and', 'P', ['not', 'P']],
    ['or', 'P', ['not', 'P']],
    ['impl', ['and', 'P', ['not', 'P']], 'Q'],
    ['impl', 'P', ['impl', 'Q', 'P']],
    ['equiv', 'P', 'Q'],
    ['xor', 'P', ['xor', 'Q', 'R']],
    ['ite', 'P', 'Q', ['not', 'R']],
    ['not', ['ite', ['xor', 'P', 'Q'], 'R', False]],
    ['or', ['and', 'P', 'Q'], ['and', 'R', 'S'], ['not', 'P']],
    ['and', ['or', 'P', True], ['or', 'Q', False], ['not', ['and', 'R', 'R']]],
    ['equiv', ['and', 'P', 'Q', 'R'], ['or', ['not', 'S'], 'T1']],
    ['not', ['equiv', ['impl', 'P', 'Q'], ['impl', ['not', 'Q'], ['not', 'P']]]],
    ['xor', ['or', 'A', 'B'], ['and', 'A', ['not', 'C'], True]],
]


def models(phi):
    """All models of the atoms of `phi`, as dictionaries."""
    atoms = atoms_of(phi)
    for values in itertools.product((True, False), repeat=len(atoms)):
        yield dict(zip(atoms, values))


@pytest.fixture(params=FORMULAS, ids=repr)
def formula(request):
    return load(request.param)
