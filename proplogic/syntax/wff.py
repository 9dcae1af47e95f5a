"""Well-formedness of propositional formulas.

A formula is well-formed if it is a truth value, an atom with an admissible
name, or an application of a known operator to well-formed formulas whose
number matches the arity of the operator. The functions here accept both
instances of :class:`.Formula` and the external list representation, where
truth values are ``True`` and ``False``, atoms are :class:`str`, and
applications are lists ``[keyword, operand, ...]``:

>>> is_wff(['and', 'P'])
True
>>> is_wff(['impl', 'P'])
False
>>> print(explain_wff(['or', 'P', ['impl', 'Q']]))
arity mismatch for 'impl' at args[1]: expected 2 operands, found 1 operand

Diagnostics describe the first violation in pre-order. All traversals use
an explicit stack, so that there is no limit on the depth of formulas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .atomic import NAME_PATTERN, RESERVED_PREFIX, Var
from .boolean import BooleanFormula, OPERATORS, _F, _T
from .formula import Formula
from ..support.excepthook import NoTraceException

from ..support.tracing import trace  # noqa


TRUTH_VALUE_NAMES = ('T', 'true', 'F', 'false')


@dataclass(frozen=True)
class Diagnostic:
    """The first violation of the grammar found in a formula.
    """

    path: tuple[int, ...]
    """The indices of the operands on the way from the root to the offending
    subformula.
    """

    problem: str
    expected: str
    actual: str

    def __str__(self) -> str:
        where = ''.join(f'[{i}]' for i in self.path)
        where = f'args{where}' if where else 'root'
        return f'{self.problem} at {where}: expected {self.expected}, found {self.actual}'


class GrammarError(NoTraceException):
    """Raised for formulas that are not well-formed. Formulas are never
    repaired silently.
    """

    diagnostic: Optional[Diagnostic]

    def __init__(self, diagnostic: Diagnostic | str) -> None:
        if isinstance(diagnostic, Diagnostic):
            super().__init__(str(diagnostic))
            self.diagnostic = diagnostic
        else:
            super().__init__(diagnostic)
            self.diagnostic = None


def is_op(symbol: object) -> bool:
    """Is `symbol` an operator keyword of propositional logic?

    >>> is_op('xor'), is_op('nand')
    (True, False)
    """
    return isinstance(symbol, str) and symbol in OPERATORS


def arity(op: object) -> Optional[int]:
    """Arity of operator `op`, which is either a keyword or an operator class.
    -1 means variadic. :obj:`None` if `op` is not an operator.

    >>> from proplogic import Ite
    >>> arity('not'), arity('and'), arity(Ite), arity('P')
    (1, -1, 3, None)
    """
    if is_op(op):
        return OPERATORS[op].arity  # type: ignore[index]
    if op in OPERATORS.values():
        return op.arity  # type: ignore[union-attr]
    return None


def is_nary(op: object) -> bool:
    """Is `op` a variadic operator?

    >>> is_nary('or'), is_nary('impl')
    (True, False)
    """
    return arity(op) == -1


def is_atom(symbol: object) -> bool:
    """Is `symbol` an admissible atom name? The reserved prefix
    :data:`.atomic.RESERVED_PREFIX` is admissible here.

    >>> is_atom('P_1'), is_atom('ts_1'), is_atom('or'), is_atom('false'), is_atom('T')
    (True, True, False, False, False)
    >>> is_atom('1P'), is_atom(True)
    (False, False)
    """
    return (isinstance(symbol, str)
            and NAME_PATTERN.fullmatch(symbol) is not None
            and symbol not in OPERATORS
            and symbol not in TRUTH_VALUE_NAMES)


def _operands(n: int) -> str:
    return f'{n} operand' if n == 1 else f'{n} operands'


def _check_name(name: str, path: tuple[int, ...], allow_reserved: bool) -> Optional[Diagnostic]:
    if not is_atom(name):
        return Diagnostic(
            path, f'illegal atom name {name!r}',
            'an identifier that is not an operator keyword or a truth value',
            repr(name))
    if not allow_reserved and name.startswith(RESERVED_PREFIX):
        return Diagnostic(
            path, f'reserved atom name {name!r}',
            f'a name not starting with {RESERVED_PREFIX!r}', repr(name))
    return None


def _check_application(keyword: Any, n: int, path: tuple[int, ...]) -> Optional[Diagnostic]:
    if not is_op(keyword):
        return Diagnostic(
            path, f'unknown operator {keyword!r}',
            f'one of {", ".join(OPERATORS)}', repr(keyword))
    expected = OPERATORS[keyword].arity
    if expected != -1 and expected != n:
        return Diagnostic(
            path, f'arity mismatch for {keyword!r}', _operands(expected), _operands(n))
    return None


def explain_wff(phi: Any, allow_reserved: bool = True) -> Optional[Diagnostic]:
    """Check whether `phi` is well-formed. Returns :obj:`None` if so, and a
    :class:`Diagnostic` describing the first violation otherwise.

    >>> from proplogic import And, Var
    >>> explain_wff(['and', 'P', ['not', 'Q']]) is None
    True
    >>> print(explain_wff(['nand', 'P', 'Q']))
    unknown operator 'nand' at root: expected one of not, and, or, impl, equiv, xor, ite, found 'nand'
    >>> print(explain_wff(And(Var('P'), Var('true'))))
    illegal atom name 'true' at args[1]: expected an identifier that is not an operator keyword or a truth value, found 'true'
    >>> print(explain_wff(['not', 'ts_1'], allow_reserved=False))
    reserved atom name 'ts_1' at args[0]: expected a name not starting with 'ts_', found 'ts_1'
    >>> print(explain_wff(['or', 1]))
    not a formula at args[0]: expected a truth value, an atom name, or a list, found 1
    """
    stack: list[tuple[Any, tuple[int, ...]]] = [(phi, ())]
    while stack:
        f, path = stack.pop()
        diagnostic: Optional[Diagnostic]
        match f:
            case bool() | _T() | _F():
                continue
            case str():
                diagnostic = _check_name(f, path, allow_reserved)
            case Var():
                diagnostic = _check_name(f.name, path, allow_reserved)
            case BooleanFormula():
                diagnostic = _check_application(getattr(f.op, 'keyword', None), len(f.args), path)
                operands: Any = f.args
            case list() | tuple() if not f:
                diagnostic = Diagnostic(path, 'empty application', '[operator, operand, ...]', '[]')
            case list() | tuple():
                diagnostic = _check_application(f[0], len(f) - 1, path)
                operands = f[1:]
            case Formula():
                diagnostic = Diagnostic(
                    path, f'unknown operator {f.op.__name__!r}',
                    f'one of {", ".join(OPERATORS)}', repr(f.op.__name__))
            case _:
                s = repr(f)
                diagnostic = Diagnostic(
                    path, 'not a formula', 'a truth value, an atom name, or a list',
                    s if len(s) <= 60 else s[:57] + '...')
        if diagnostic is not None:
            return diagnostic
        if isinstance(f, (BooleanFormula, list, tuple)):
            for i in reversed(range(len(operands))):
                stack.append((operands[i], path + (i, )))
    return None


def is_wff(phi: Any, allow_reserved: bool = True) -> bool:
    """Is `phi` a well-formed formula?

    >>> from proplogic import VV, Not
    >>> P, Q = VV.get('P', 'Q')
    >>> is_wff(Not(P >> Q))
    True
    >>> is_wff(['ite', 'P', 'Q'])
    False
    >>> is_wff('false'), is_wff(False)
    (False, True)
    """
    return explain_wff(phi, allow_reserved) is None


def check_wff(phi: Any, allow_reserved: bool = True) -> None:
    """Raise :exc:`GrammarError` if `phi` is not well-formed.

    >>> check_wff(['xor', 'P', 'Q', 'R'])
    Traceback (most recent call last):
    ...
    proplogic.syntax.wff.GrammarError: arity mismatch for 'xor' at root: expected 2 operands, found 3 operands
    """
    diagnostic = explain_wff(phi, allow_reserved)
    if diagnostic is not None:
        raise GrammarError(diagnostic)
