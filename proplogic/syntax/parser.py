"""A parser for formulas written in Python syntax. The text is parsed with
:mod:`ast` and translated into the list representation of :mod:`.sexpr`,
which is then checked and loaded. Nothing is evaluated.

>>> parse('(P & ~Q) >> R')
Implies(And(P, Not(Q)), R)
>>> parse('Ite(P, Q, F) | (P ^ Q)')
Or(Ite(P, Q, F), Xor(P, Q))
>>> parse('P == Q != R')
And(Equivalent(P, Q), Xor(Q, R))

Recall that Python's shift operators bind stronger than ``&``, ``^``, and
``|``, so that ``P & Q >> R`` means ``P & (Q >> R)``. The names ``T``,
``true``, ``F``, ``false`` denote truth values.
"""

import ast
from typing import Any, Final

from .formula import Formula
from .sexpr import load
from .wff import GrammarError

from ..support.tracing import trace  # noqa


class ParserError(Exception):
    pass


class L1Parser:
    """Translate Python syntax into formulas. Malformed input raises
    :exc:`.wff.GrammarError`:

    >>> parse('P | ts_1')
    Traceback (most recent call last):
    ...
    proplogic.syntax.wff.GrammarError: reserved atom name 'ts_1' at args[1]: expected a name not starting with 'ts_', found 'ts_1'
    >>> parse('Implies(P)')
    Traceback (most recent call last):
    ...
    proplogic.syntax.wff.GrammarError: arity mismatch for 'impl' at root: expected 2 operands, found 1 operand
    >>> parse('P + Q')
    Traceback (most recent call last):
    ...
    proplogic.syntax.wff.GrammarError: ParserError: unknown operator Add() in P + Q
    """

    FUNCTIONS: Final = {
        'Not': 'not', 'And': 'and', 'Or': 'or', 'Implies': 'impl',
        'Equivalent': 'equiv', 'Xor': 'xor', 'Ite': 'ite'}

    def __call__(self, s: str, allow_reserved: bool = False) -> Formula:
        return self.process(s, allow_reserved)

    def process(self, s: str, allow_reserved: bool = False) -> Formula:
        try:
            a = ast.parse(s, mode='eval')
            assert isinstance(a, ast.Expression)
            return load(self._process(a.body), allow_reserved)
        except (ParserError, SyntaxError) as exc:
            raise GrammarError(f'{type(exc).__name__}: {exc.args[0]}') from None

    def _process(self, a: ast.expr) -> Any:
        match a:
            case ast.Call(func=func, args=args, keywords=keywords):
                if keywords:
                    raise ParserError(f'keyword arguments are not supported in {ast.unparse(a)}')
                if not isinstance(func, ast.Name) or func.id not in self.FUNCTIONS:
                    raise ParserError(f'unknown operator {ast.unparse(func)} in {ast.unparse(a)}')
                return [self.FUNCTIONS[func.id], *(self._process(arg) for arg in args)]
            case ast.BoolOp(op=op, values=args):
                match op:
                    case ast.Or():
                        return ['or', *(self._process(arg) for arg in args)]
                    case ast.And():
                        return ['and', *(self._process(arg) for arg in args)]
                    case _:
                        raise ParserError(f'unknown operator {ast.dump(op)} in {ast.unparse(a)}')
            case ast.BinOp(op=op, left=left, right=right):
                match op:
                    case ast.BitOr():
                        return ['or', self._process(left), self._process(right)]
                    case ast.BitAnd():
                        return ['and', self._process(left), self._process(right)]
                    case ast.BitXor():
                        return ['xor', self._process(left), self._process(right)]
                    case ast.RShift():
                        return ['impl', self._process(left), self._process(right)]
                    case ast.LShift():
                        return ['impl', self._process(right), self._process(left)]
                    case _:
                        raise ParserError(f'unknown operator {ast.dump(op)} in {ast.unparse(a)}')
            case ast.UnaryOp(op=op, operand=operand):
                match op:
                    case ast.Invert() | ast.Not():
                        return ['not', self._process(operand)]
                    case _:
                        raise ParserError(f'unknown operator {ast.dump(op)} in {ast.unparse(a)}')
            case ast.Compare(ops=ops, left=left, comparators=comparators):
                eval_left = self._process(left)
                L = []
                for op, right in zip(ops, comparators):
                    eval_right = self._process(right)
                    match op:
                        case ast.Eq():
                            L.append(['equiv', eval_left, eval_right])
                        case ast.NotEq():
                            L.append(['xor', eval_left, eval_right])
                        case _:
                            raise ParserError(f'unknown operator {ast.dump(op)} '
                                              f'in {ast.unparse(a)}')
                    eval_left = eval_right
                return L[0] if len(L) == 1 else ['and', *L]
            case ast.Constant(value=bool(value)):
                return value
            case ast.Name(id=id):
                match id:
                    case 'T' | 'true':
                        return True
                    case 'F' | 'false':
                        return False
                    case _:
                        return id
            case _:
                raise ParserError(f'cannot parse {ast.unparse(a)}')


parse = L1Parser()
"""User interface for parsing formulas in Python syntax.
"""
