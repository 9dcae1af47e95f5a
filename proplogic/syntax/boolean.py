"""We introduce formulas with Boolean toplevel operators as subclasses of
:class:`.Formula`. Every operator class has a :attr:`keyword`, which is used
in the external list representation, and an :attr:`arity`. The arity of the
variadic operators :class:`And` and :class:`Or` is -1.
"""
from __future__ import annotations

from typing import ClassVar, final, Optional

from .formula import Formula

from ..support.tracing import trace  # noqa


class BooleanFormula(Formula):
    r"""A class whose instances are Boolean formulas in the sense that their
    toplevel operator is one of the Boolean operators :math:`\top`,
    :math:`\bot`, :math:`\lnot`, :math:`\wedge`, :math:`\vee`,
    :math:`\longrightarrow`, :math:`\longleftrightarrow`, :math:`\oplus`,
    or if-then-else.
    """

    keyword: ClassVar[str]
    """The operator symbol in the external list representation.
    """

    arity: ClassVar[int]
    """The number of arguments, or -1 for variadic operators.
    """


class BinaryBooleanFormula(BooleanFormula):
    """Common base of the binary operators :class:`Implies`,
    :class:`Equivalent`, and :class:`Xor`.
    """

    arity = 2

    def __init__(self, lhs: Formula, rhs: Formula) -> None:
        super().__init__()
        self.args = (lhs, rhs)

    @property
    def lhs(self) -> Formula:
        """The left-hand side of the binary operator.

        .. seealso::
            * :attr:`args <.formula.Formula.op>` -- all arguments as a tuple
            * :attr:`op <.formula.Formula.op>` -- operator
        """
        return self.args[0]

    @property
    def rhs(self) -> Formula:
        """The right-hand side of the binary operator.

        .. seealso::
            * :attr:`args <.formula.Formula.op>` -- all arguments as a tuple
            * :attr:`op <.formula.Formula.op>` -- operator
        """
        return self.args[1]


@final
class Equivalent(BinaryBooleanFormula):
    r"""A class whose instances are equivalences in the sense that their
    toplevel operator represents the Boolean operator
    :math:`\longleftrightarrow`.

    >>> from proplogic import VV
    >>> P, Q = VV.get('P', 'Q')
    >>> Equivalent(P, Or(P, Q))
    Equivalent(P, Or(P, Q))
    """

    keyword = 'equiv'


@final
class Implies(BinaryBooleanFormula):
    """A class whose instances are implications in the sense that their
    toplevel operator represents the Boolean operator :math:`\\longrightarrow`.

    >>> from proplogic import VV
    >>> P, Q = VV.get('P', 'Q')
    >>> Implies(P, Q).rhs
    Q

    .. seealso::
        * :meth:`>>, __rshift__() <.formula.Formula.__rshift__>` -- \
            infix notation of :class:`Implies`
        * :meth:`\\<\\<, __lshift__() <.formula.Formula.__lshift__>` -- \
            infix notation of converse :class:`Implies`
    """  # noqa

    keyword = 'impl'


@final
class Xor(BinaryBooleanFormula):
    r"""A class whose instances are exclusive disjunctions in the sense that
    their toplevel operator represents the Boolean operator :math:`\oplus`.

    .. seealso::
        * :meth:`^, __xor__() <.formula.Formula.__xor__>` -- \
            infix notation of :class:`Xor`
    """

    keyword = 'xor'


@final
class Ite(BooleanFormula):
    """A class whose instances are conditionals *if* :attr:`cond` *then*
    :attr:`then_` *else* :attr:`else_`.

    >>> from proplogic import VV
    >>> P, Q, R = VV.get('P', 'Q', 'R')
    >>> f = Ite(P, Q, R)
    >>> f.cond, f.then_, f.else_
    (P, Q, R)
    """

    keyword = 'ite'
    arity = 3

    def __init__(self, cond: Formula, then_: Formula, else_: Formula) -> None:
        super().__init__()
        self.args = (cond, then_, else_)

    @property
    def cond(self) -> Formula:
        """The condition.
        """
        return self.args[0]

    @property
    def then_(self) -> Formula:
        """The formula selected when :attr:`cond` holds.
        """
        return self.args[1]

    @property
    def else_(self) -> Formula:
        """The formula selected when :attr:`cond` does not hold.
        """
        return self.args[2]


class AndOr(BooleanFormula):
    """Common base of the variadic operators :class:`And` and :class:`Or`.
    In contrast to the other operators, the constructors take any number of
    arguments, including none. The arguments are stored as given, without
    flattening or removal of duplicates.
    """

    arity = -1

    def __init__(self, *args: Formula) -> None:
        super().__init__()
        self.args = args

    @classmethod
    def dual(cls) -> type[AndOr]:
        ...

    @classmethod
    def neutral(cls) -> type[_T | _F]:
        ...

    @classmethod
    def definite(cls) -> type[_T | _F]:
        r"""A class method yielding the operator of the constant that
        determines the value of the operator when it occurs as an argument.
        The definite is the dual of the neutral.
        """
        return cls.neutral().dual()

    @classmethod
    def definite_element(cls) -> _T | _F:
        """A class method yielding the unique instance of
        :meth:`definite`.
        """
        return cls.definite()()

    @classmethod
    def neutral_element(cls) -> _T | _F:
        """A class method yielding the unique instance of :meth:`neutral`,
        which is the value of the empty application.
        """
        return cls.neutral()()


@final
class And(AndOr):
    """A class whose instances are conjunctions in the sense that their
    toplevel operator represents the Boolean operator
    :math:`\\wedge`.

    >>> from proplogic import VV
    >>> P, Q, R = VV.get('P', 'Q', 'R')
    >>> And()
    And()
    >>> And(P)
    And(P)
    >>> And(P, And(Q, R))
    And(P, And(Q, R))
    >>> And.neutral_element(), And.definite_element()
    (T, F)

    .. seealso::
        * :meth:`&, __and__() <.formula.Formula.__and__>` -- \
            infix notation of :class:`And`
        * :attr:`args <.formula.Formula.op>` -- all arguments as a tuple
        * :attr:`op <.formula.Formula.op>` -- operator
    """

    keyword = 'and'

    @classmethod
    def dual(cls) -> type[Or]:
        r"""A class method yielding the class :class:`Or`, which implements
        the dual operator :math:`\vee` of :math:`\wedge`.
        """
        return Or

    @classmethod
    def neutral(cls) -> type[_T]:
        r"""A class method yielding the class :class:`_T`, which is the
        operator of the constant Formula :data:`T`.
        """
        return _T


@final
class Or(AndOr):
    """A class whose instances are disjunctions in the sense that their
    toplevel operator represents the Boolean operator
    :math:`\\vee`.

    >>> from proplogic import VV
    >>> P, = VV.get('P')
    >>> Or()
    Or()
    >>> Or.neutral_element(), Or.definite_element()
    (F, T)

    .. seealso::
        * :meth:`|, __or__() <.formula.Formula.__or__>` -- \
            infix notation of :class:`Or`
    """

    keyword = 'or'

    @classmethod
    def dual(cls) -> type[And]:
        r"""A class method yielding the class :class:`And`, which implements
        the dual operator :math:`\wedge` of :math:`\vee`.
        """
        return And

    @classmethod
    def neutral(cls) -> type[_F]:
        r"""A class method yielding the class :class:`_F`, which is the
        operator of the constant Formula :data:`F`.
        """
        return _F


@final
class Not(BooleanFormula):
    """A class whose instances are negated formulas in the sense that their
    toplevel operator is the Boolean operator
    :math:`\\neg`.

    >>> from proplogic import VV
    >>> P, = VV.get('P')
    >>> Not(P)
    Not(P)

    .. seealso::
        * :meth:`~, __invert__() <.formula.Formula.__invert__>` -- \
            short notation of :class:`Not`
    """

    keyword = 'not'
    arity = 1

    def __init__(self, arg: Formula) -> None:
        super().__init__()
        self.args = (arg, )

    @property
    def arg(self) -> Formula:
        """The one argument of the operator :math:`\\neg`.
        """
        return self.args[0]


def involutive_not(arg: Formula) -> Formula:
    """Construct a formula equivalent Not(arg) using the involutive law if
    applicable.

    >>> from proplogic import VV
    >>> P, = VV.get('P')
    >>> involutive_not(P)
    Not(P)
    >>> involutive_not(Not(P))
    P
    >>> involutive_not(T)
    Not(T)
    """
    if isinstance(arg, Not):
        return arg.arg
    return Not(arg)


@final
class _T(BooleanFormula):
    """A singleton class whose sole instance represents the constant Formula
    that is always true.

    >>> _T()
    T
    >>> _T() is _T()
    True
    """

    # This is a quite basic implementation of a singleton class. It does not
    # support subclassing. We do not use a module because we need _T to be a
    # subclass itself.

    keyword = 'true'
    arity = 0

    _instance: Optional[_T] = None

    def __init__(self) -> None:
        super().__init__()
        self.args = ()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'T'

    @classmethod
    def dual(cls) -> type[_F]:
        r"""A class method yielding the class :class:`_F`, which implements
        the dual operator :math:`\bot` of :math:`\top`.
        """
        return _F


T: _T = _T()
"""Support use as a constant without parentheses.

>>> T is _T()
True
"""


@final
class _F(BooleanFormula):
    """A singleton class whose sole instance represents the constant Formula
    that is always false.

    >>> _F()
    F
    >>> _F() is _F()
    True
    """

    # This is a quite basic implementation of a singleton class. It does not
    # support subclassing. We do not use a module because we need _F to be a
    # subclass itself.

    keyword = 'false'
    arity = 0

    _instance: Optional[_F] = None

    def __init__(self) -> None:
        super().__init__()
        self.args = ()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'F'

    @classmethod
    def dual(cls) -> type[_T]:
        r"""A class method yielding the class :class:`_T`, which implements
        the dual operator :math:`\top` of :math:`\bot`.
        """
        return _T


F: _F = _F()
"""Support use as a constant without parentheses.

>>> F is _F()
True
"""


OPERATORS: dict[str, type[BooleanFormula]] = {
    op.keyword: op for op in (Not, And, Or, Implies, Equivalent, Xor, Ite)}
"""The operators of propositional logic by keyword.
"""
