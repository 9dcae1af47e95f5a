from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Final, Iterator, Optional, Self, TypeVar
from typing_extensions import TypeIs

from IPython.lib import pretty

from ..support.tracing import trace  # noqa


T_fold = TypeVar('T_fold')


class Formula:
    r"""This abstract base class implements representations of and methods on
    propositional formulas recursively built using the operators

    1. Truth values :math:`\top` and :math:`\bot`

    2. Negation :math:`\lnot`

    3. Conjunction :math:`\land` and disjunction :math:`\lor`, which are
       variadic

    4. Implication :math:`\longrightarrow`, bi-implication
       :math:`\longleftrightarrow`, exclusive or :math:`\oplus`, and the
       ternary if-then-else

    starting from atomic propositions :class:`Var <.atomic.Var>`.

    As an abstract base class, :class:`Formula` cannot be instantiated.
    Formulas are immutable. Constructors never simplify their arguments, so
    that ``And()``, ``And(P)``, and ``P`` are three different formulas.
    """

    _hash: Optional[int]

    @property
    def op(self) -> type[Self]:
        """Operator. This property can be used with instances of subclasses of
        :class:`Formula`. It yields the respective subclass.
        """
        return type(self)

    @property
    def args(self) -> tuple[Any, ...]:
        """The arguments of a formula as a tuple.

        .. seealso::
            * :attr:`Not.arg <.boolean.Not.arg>` \
                -- argument formula of a logical :math:`\\neg`
            * :attr:`Implies.lhs <.boolean.Implies.lhs>` \
                -- left hand side of a logical :math:`\\longrightarrow`
            * :attr:`Var.name <.atomic.Var.name>` \
                -- the name of an atomic proposition
        """
        return self._args

    @args.setter
    def args(self, args: tuple[Any, ...]) -> None:
        self._args = args

    def __and__(self, other: Formula) -> Formula:
        """Override the :obj:`& <object.__and__>` operator to apply
        :class:`.boolean.And`.

        >>> from proplogic import VV
        >>> P, Q = VV.get('P', 'Q')
        >>> P & Q
        And(P, Q)

        Note that nested applications are not flattened:

        >>> P & Q & P
        And(And(P, Q), P)
        """
        return And(self, other)

    def __eq__(self, other: object) -> bool:
        """A test for structural equality of `self` and `other`.

        Note that this is not a logical operator for equivalence.

        >>> from proplogic import VV, Or
        >>> P, Q = VV.get('P', 'Q')
        >>> Or(P, Q) == Or(P, Q)
        True
        >>> Or(P, Q) == Or(Q, P)
        False

        The comparison uses an explicit stack, so that arbitrarily deep
        formulas can be compared.
        """
        if not isinstance(other, Formula):
            return False
        stack: list[tuple[Formula, Formula]] = [(self, other)]
        while stack:
            f, g = stack.pop()
            if f is g:
                continue
            if f.op is not g.op or len(f.args) != len(g.args) or hash(f) != hash(g):
                return False
            if isinstance(f, Var):
                if f.args != g.args:
                    return False
            else:
                stack.extend(zip(f.args, g.args))
        return True

    def __getnewargs__(self) -> tuple[Any, ...]:
        return self.args

    def __getstate__(self) -> dict[str, Any]:
        # Cached hashes of strings are only valid within one process.
        return {'_args': self._args, '_hash': None}

    def __hash__(self) -> int:
        """
        Hash function.

        hash() yields deterministic results for a fixed hash seed. Set the
        environment variable PYTHONHASHSEED to a positive integer when
        comparing hashes from various Python sessions, e.g. for debugging.

        Hashes of subformulas are computed and cached bottom-up with an
        explicit stack.
        """
        stack: list[tuple[Formula, bool]] = [(self, False)]
        while stack:
            f, expanded = stack.pop()
            if f._hash is not None:
                continue
            if expanded or isinstance(f, Var) or not f.args:
                f._hash = hash((f.op.__name__, f.args))
            else:
                stack.append((f, True))
                stack.extend((arg, False) for arg in f.args if arg._hash is None)
        assert self._hash is not None
        return self._hash

    @abstractmethod
    def __init__(self, *args: object) -> None:
        """This abstract base class is not supposed to have instances itself.
        Technically this is enforced via this abstract initializer.
        """
        self._hash = None

    def __invert__(self) -> Formula:
        """Override the :obj:`~ <object.__invert__>` operator to apply
        :class:`Not`.

        >>> from proplogic import VV
        >>> P, = VV.get('P')
        >>> ~ P
        Not(P)
        """
        return Not(self)

    def __lshift__(self, other: Formula) -> Formula:
        r"""Override the :obj:`\<\< <object.__lshift__>` operator to apply
        :class:`Implies` with reversed sides.

        >>> from proplogic import VV
        >>> P, Q = VV.get('P', 'Q')
        >>> P << Q
        Implies(Q, P)
        """
        return Implies(other, self)

    def __or__(self, other: Formula) -> Formula:
        """Override the :obj:`| <object.__or__>` operator to apply :class:`Or`.

        >>> from proplogic import VV
        >>> P, Q = VV.get('P', 'Q')
        >>> P | ~Q
        Or(P, Not(Q))
        """
        return Or(self, other)

    def __repr__(self) -> str:
        """A Representation of the :class:`Formula` `self` that is suitable for
        use as an input.
        """
        def as_repr(f: Formula, args_as_repr: list[str]) -> str:
            if isinstance(f, (Var, _T, _F)):
                return repr(f)
            return f'{f.op.__name__}({", ".join(args_as_repr)})'

        return fold(self, as_repr)

    def __rshift__(self, other: Formula) -> Formula:
        """Override the :obj:`>> <object.__rshift__>` operator to apply
        :class:`Implies`.

        >>> from proplogic import VV
        >>> P, Q = VV.get('P', 'Q')
        >>> P >> Q
        Implies(P, Q)
        """
        return Implies(self, other)

    def __str__(self) -> str:
        """Infix representation of the Formula used in printing. Conjunctions
        and disjunctions with less than two arguments are printed in
        functional notation, which makes the structure of normal forms
        visible.

        >>> from proplogic import VV, And, Or, Ite
        >>> P, Q, R = VV.get('P', 'Q', 'R')
        >>> print(Or(And(P, ~Q), Q >> R))
        (P and not Q) or (Q --> R)
        >>> print(And(Or(P), Or()))
        Or(P) and Or()
        >>> print(Or(P))
        Or(P)
        >>> print(Ite(P, Q ^ R, T))
        Ite(P, Q xor R, T)
        """
        SYMBOL: Final = {
            And: 'and', Or: 'or', Implies: '-->', Equivalent: '<-->',
            Xor: 'xor', Not: 'not', _F: 'F', _T: 'T'}
        PRECEDENCE: Final = {
            And: 50, Or: 50, Implies: 10, Equivalent: 10, Xor: 10, Not: 99,
            Ite: 99, _F: 99, _T: 99}
        SPACING: Final = ' '

        def as_str(f: Formula, args_as_str: list[str]) -> str:
            match f:
                case Var():
                    return f.name
                case And() | Or() if len(f.args) < 2:
                    return f'{f.op.__name__}({", ".join(args_as_str)})'
                case And() | Or() | Equivalent() | Implies() | Xor():
                    L = []
                    for arg, arg_as_str in zip(f.args, args_as_str):
                        if PRECEDENCE[f.op] >= PRECEDENCE.get(arg.op, 100) \
                                and not _is_functional(arg):
                            arg_as_str = f'({arg_as_str})'
                        L.append(arg_as_str)
                    return f'{SPACING}{SYMBOL[f.op]}{SPACING}'.join(L)
                case Not():
                    arg_as_str = args_as_str[0]
                    if f.arg.op not in (Var, Not, Ite, _F, _T):
                        arg_as_str = f'({arg_as_str})'
                    return f'{SYMBOL[Not]}{SPACING}{arg_as_str}'
                case Ite():
                    return f'Ite({", ".join(args_as_str)})'
                case _F() | _T():
                    return SYMBOL[f.op]
                case _:
                    assert False, type(f)

        return fold(self, as_str)

    def __xor__(self, other: Formula) -> Formula:
        """Override the :obj:`^ <object.__xor__>` operator to apply
        :class:`Xor`.

        >>> from proplogic import VV
        >>> P, Q = VV.get('P', 'Q')
        >>> P ^ Q
        Xor(P, Q)
        """
        return Xor(self, other)

    def as_latex(self) -> str:
        r"""LaTeX representation as a string, which can be used elsewhere.

        >>> from proplogic import VV, Or
        >>> P, Q, R = VV.get('P', 'Q', 'R')
        >>> Or(P & ~Q, R).as_latex()
        '(P \\, \\wedge \\, \\neg \\, Q) \\, \\vee \\, R'

        .. seealso:: :meth:`_repr_latex_` -- LaTeX representation for Jupyter notebooks
        """
        SYMBOL: Final = {
            And: '\\wedge', Or: '\\vee', Implies: '\\longrightarrow',
            Equivalent: '\\longleftrightarrow', Xor: '\\oplus', Not: '\\neg',
            _F: '\\bot', _T: '\\top'}
        PRECEDENCE: Final = {
            And: 50, Or: 50, Equivalent: 10, Implies: 10, Xor: 10, Not: 99,
            Ite: 99, _F: 99, _T: 99}
        SPACING: Final = ' \\, '

        def as_latex(f: Formula, args_as_latex: list[str]) -> str:
            match f:
                case Var():
                    return f.as_latex()
                case And() | Or() if len(f.args) < 2:
                    if not f.args:
                        return SYMBOL[f.op.neutral()]
                    return args_as_latex[0]
                case And() | Or() | Equivalent() | Implies() | Xor():
                    L = []
                    for arg, arg_as_latex in zip(f.args, args_as_latex):
                        if PRECEDENCE[f.op] >= PRECEDENCE.get(arg.op, 99) \
                                and not _is_functional(arg):
                            arg_as_latex = f'({arg_as_latex})'
                        L.append(arg_as_latex)
                    return f'{SPACING}{SYMBOL[f.op]}{SPACING}'.join(L)
                case Not():
                    arg_as_latex = args_as_latex[0]
                    if f.arg.op not in (Var, Not, Ite, _F, _T):
                        arg_as_latex = f'({arg_as_latex})'
                    return f'{SYMBOL[Not]}{SPACING}{arg_as_latex}'
                case Ite():
                    return f'\\mathrm{{ite}}({", ".join(args_as_latex)})'
                case _F() | _T():
                    return SYMBOL[f.op]
                case _:
                    assert False, type(f)

        return fold(self, as_latex)

    def as_list(self) -> Any:
        """The external list representation of `self`: ``True``, ``False``,
        an atom name, or a list ``[keyword, operand, ...]``.

        >>> from proplogic import VV, Ite
        >>> P, Q = VV.get('P', 'Q')
        >>> Ite(P, ~Q, T).as_list()
        ['ite', 'P', ['not', 'Q'], True]

        .. seealso:: :func:`.sexpr.load` -- the inverse operation
        """
        def as_list(f: Formula, args_as_list: list[Any]) -> Any:
            match f:
                case _T():
                    return True
                case _F():
                    return False
                case Var():
                    return f.name
                case _:
                    return [f.keyword, *args_as_list]

        return fold(self, as_list)

    def atoms(self) -> Iterator[Var]:
        """
        An iterator over all occurrences of atomic propositions in `self`,
        from left to right. Recall that the truth values :data:`T
        <.boolean.T>` and :data:`F <.boolean.F>` are not atoms:

        >>> from proplogic import VV, Or
        >>> P, Q = VV.get('P', 'Q')
        >>> f = Or(P & Q, ~P, T)
        >>> list(f.atoms())
        [P, Q, P]

        The traversal uses an explicit stack, so that arbitrarily deep
        formulas can be processed.

        .. seealso:: :func:`.evaluate.atoms_of` -- sorted names of atoms
        """
        stack: list[Formula] = [self]
        while stack:
            f = stack.pop()
            if isinstance(f, Var):
                yield f
            else:
                stack.extend(reversed(f.args))

    def depth(self) -> int:
        """The depth of a formula is the maximal length of a path from the root
        to a truth value or an atom in the expression tree:

        >>> from proplogic import VV, And
        >>> P, Q = VV.get('P', 'Q')
        >>> (P >> ~(P & Q)).depth()
        3
        >>> And().depth()
        0

        Truth values, atoms, and empty conjunctions and disjunctions have
        depth 0. The traversal uses an explicit stack.
        """
        result = 0
        stack: list[tuple[Formula, int]] = [(self, 0)]
        while stack:
            f, d = stack.pop()
            if isinstance(f, Var) or not f.args:
                result = max(result, d)
                continue
            for arg in f.args:
                stack.append((arg, d + 1))
        return result

    @staticmethod
    def is_and(f: Formula) -> TypeIs[And]:
        """Type narrowing :func:`isinstance` test for :class:`.boolean.And`.
        """
        return isinstance(f, And)

    @staticmethod
    def is_false(f: Formula) -> TypeIs[_F]:
        """Type narrowing :func:`isinstance` test for :class:`.boolean._F`.
        """
        return isinstance(f, _F)

    @staticmethod
    def is_not(f: Formula) -> TypeIs[Not]:
        """Type narrowing :func:`isinstance` test for :class:`.boolean.Not`.
        """
        return isinstance(f, Not)

    @staticmethod
    def is_or(f: Formula) -> TypeIs[Or]:
        """Type narrowing :func:`isinstance` test for :class:`.boolean.Or`.
        """
        return isinstance(f, Or)

    @staticmethod
    def is_true(f: Formula) -> TypeIs[_T]:
        """Type narrowing :func:`isinstance` test for :class:`.boolean._T`.
        """
        return isinstance(f, _T)

    @staticmethod
    def is_var(f: Formula) -> TypeIs[Var]:
        """Type narrowing :func:`isinstance` test for :class:`.atomic.Var`.
        """
        return isinstance(f, Var)

    def _repr_latex_(self) -> str:
        """A LaTeX representation for Jupyter notebooks. In general, the
        underlying method :meth:`as_latex` should be used instead.

        Due to a current limitation of Jupyter, the LaTeX representration is
        cut off after at most 5000 characters.

        .. seealso:: :meth:`as_latex` -- LaTeX representation
        """
        limit = 5000
        as_latex = self.as_latex()
        if len(as_latex) > limit:
            as_latex = as_latex[:limit]
            opc = 0
            for pos in range(limit):
                match as_latex[pos]:
                    case '{':
                        opc += 1
                    case '}':
                        opc -= 1
            assert opc >= 0
            while opc > 0:
                match as_latex[-1]:
                    case '{':
                        opc -= 1
                    case '}':
                        opc += 1
                as_latex = as_latex[:-1]
            as_latex += '{}\\dots'
        return f'$\\displaystyle {as_latex}$'

    def _repr_pretty_(self, p: pretty.RepresentationPrinter, cycle: bool) -> None:
        assert not cycle
        op = self.__class__.__name__
        with p.group(len(op) + 1, op + '(', ')'):
            for idx, arg in enumerate(self.args):
                if idx:
                    p.text(',')
                    p.breakable()
                p.pretty(arg)


def fold(phi: Formula, combine: Callable[[Formula, list[Any]], T_fold]) -> T_fold:
    """Compute a value for `phi` bottom-up. For every subformula `f`,
    `combine` is called with `f` and the list of values already computed
    for ``f.args``. For atoms and truth values this list is empty.

    >>> from proplogic import VV, And
    >>> P, Q = VV.get('P', 'Q')
    >>> fold(And(P, ~Q, And()), lambda f, values: 1 + sum(values))
    5

    The traversal uses an explicit stack, so that there is no limit on the
    depth of `phi`.
    """
    results: list[T_fold] = []
    stack: list[tuple[Formula, bool]] = [(phi, False)]
    while stack:
        f, expanded = stack.pop()
        if isinstance(f, Var) or not f.args:
            results.append(combine(f, []))
        elif not expanded:
            stack.append((f, True))
            stack.extend((arg, False) for arg in reversed(f.args))
        else:
            n = len(f.args)
            values = results[len(results) - n:]
            del results[len(results) - n:]
            results.append(combine(f, values))
    assert len(results) == 1, results
    return results[0]


def _is_functional(f: Formula) -> bool:
    # And() and Or(P) are printed as function calls and need no parentheses.
    return isinstance(f, (And, Or)) and len(f.args) < 2


# The following imports are intentionally late to avoid circularity.
from .atomic import Var
from .boolean import And, Equivalent, Implies, Ite, Not, Or, Xor, _F, _T
from .boolean import T  # noqa, used in doctests only
