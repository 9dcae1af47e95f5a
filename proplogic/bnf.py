"""This module :mod:`proplogic.bnf` provides Boolean normal forms. The
conjunctive normal form of a formula is computed by a pipeline of syntactic
rewrites:

1. :func:`eliminate_derived` expresses :class:`.Implies`,
   :class:`.Equivalent`, :class:`.Xor`, and :class:`.Ite` via :class:`.Not`,
   :class:`.And`, and :class:`.Or`.

2. :func:`to_nnf` pushes negations to the atoms.

3. :func:`nnf_to_cnf` applies the distributive law.

4. :func:`flatten` merges nested conjunctions and disjunctions.

5. :func:`reduce_cnf` removes tautological clauses, vacuous truth values,
   and duplicate clauses.

The disjunctive normal form of `phi` is obtained from the conjunctive normal
form of ``Not(phi)`` by :func:`dual`. Both normal forms are either truth
values or have a fixed shape: a CNF is an :class:`.And` of :class:`.Or` of
literals, and a DNF is an :class:`.Or` of :class:`.And` of literals.

>>> from proplogic import parse
>>> cnf(parse('P'))
And(Or(P))
>>> cnf(parse('(P & ~P) >> Q'))
T
>>> dnf(parse('P | Q'))
Or(And(P), And(Q))
>>> cnf(parse('(P & Q) | R'))
And(Or(P, R), Or(Q, R))

Distribution can be exponential in the size of the input. The number of
clauses is limited by the option `max_clauses`.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Any, Final, Optional

from .semantics.evaluate import check_depth, PreconditionError
from .syntax import (And, Equivalent, Formula, Implies, Ite, Not, Or, Var, Xor,
                     _F, _T, F, T, fold, involutive_not, load)
from .syntax.wff import Diagnostic
from .support.excepthook import ResourceLimitError
from .support.logging import create_logger, temporary_level, Timer

from .support.tracing import trace  # noqa


logger, delta_time_formatter = create_logger(__name__)


MAX_CLAUSES: Final = 65536
"""The default for the option `max_clauses` of :class:`Options`.
"""


def is_literal(phi: Formula) -> bool:
    """Is `phi` a literal, i.e., an atom, a truth value, or the negation of an
    atom or a truth value?

    >>> from proplogic import VV
    >>> P, = VV.get('P')
    >>> is_literal(P), is_literal(~P), is_literal(~T), is_literal(~~P)
    (True, True, True, False)
    """
    match phi:
        case Var() | _T() | _F():
            return True
        case Not(arg=Var() | _T() | _F()):
            return True
        case _:
            return False


def eliminate_derived(phi: Formula) -> Formula:
    """Normalize `phi` such that only the operators :class:`.Not`,
    :class:`.And`, :class:`.Or` are used.

    >>> from proplogic import parse
    >>> eliminate_derived(parse('P >> Q'))
    Or(Not(P), Q)
    >>> eliminate_derived(parse('P ^ Q'))
    Not(And(Or(Not(P), Q), Or(Not(Q), P)))
    >>> eliminate_derived(parse('Ite(P, Q, R)'))
    Or(And(P, Q), And(Not(P), R))
    """
    def eliminate(f: Formula, args: list[Formula]) -> Formula:
        match f:
            case Var() | _T() | _F():
                return f
            case Not() | And() | Or():
                return f.op(*args)
            case Implies():
                lhs, rhs = args
                return Or(Not(lhs), rhs)
            case Equivalent():
                lhs, rhs = args
                return And(Or(Not(lhs), rhs), Or(Not(rhs), lhs))
            case Xor():
                lhs, rhs = args
                return Not(And(Or(Not(lhs), rhs), Or(Not(rhs), lhs)))
            case Ite():
                cond, then_, else_ = args
                return Or(And(cond, then_), And(Not(cond), else_))
            case _:
                assert False, type(f)

    return fold(phi, eliminate)


def to_nnf(phi: Formula) -> Formula:
    """Transform the formula `phi` into negation normal form. `phi` must not
    contain derived operators.

    >>> from proplogic import parse
    >>> to_nnf(parse('~(P & ~(Q | ~R))'))
    Or(Not(P), Or(Q, Not(R)))
    >>> to_nnf(parse('~~~P'))
    Not(P)
    >>> to_nnf(parse('~(P >> Q)'))
    Traceback (most recent call last):
    ...
    proplogic.semantics.evaluate.PreconditionError: to_nnf expects a formula without Implies; apply eliminate_derived first

    Negations are pushed down with an explicit stack, which holds the
    subformulas together with their polarity.
    """
    results: list[Formula] = []
    stack: list[tuple[Formula, bool, bool]] = [(phi, False, False)]
    while stack:
        f, negated, expanded = stack.pop()
        match f:
            case Var() | _T() | _F():
                results.append(Not(f) if negated else f)
            case Not(arg=arg):
                stack.append((arg, not negated, False))
            case And() | Or():
                op = f.op.dual() if negated else f.op
                if not f.args:
                    results.append(op())
                elif not expanded:
                    stack.append((f, negated, True))
                    stack.extend((arg, negated, False) for arg in reversed(f.args))
                else:
                    n = len(f.args)
                    args = results[len(results) - n:]
                    del results[len(results) - n:]
                    results.append(op(*args))
            case _:
                raise PreconditionError(
                    f'to_nnf expects a formula without {f.op.__name__}; '
                    f'apply eliminate_derived first')
    assert len(results) == 1, results
    return results[0]


def nnf_to_cnf(phi: Formula, max_clauses: Optional[int] = None) -> Formula:
    """Transform the formula `phi` from negation normal form into conjunctive
    normal form via the distributive law. The result is a conjunction of
    clauses, which have not been flattened yet. If `max_clauses` is not
    :obj:`None`, then :exc:`.ResourceLimitError` is raised before
    constructing more than `max_clauses` clauses in one distribution.

    >>> from proplogic import parse
    >>> nnf_to_cnf(parse('P'))
    And(Or(P))
    >>> nnf_to_cnf(parse('Or()'))
    And(Or())
    >>> nnf_to_cnf(parse('(P & Q) | ~R'))
    And(Or(Or(P), Or(Not(R))), Or(Or(Q), Or(Not(R))))
    >>> nnf_to_cnf(parse('(P & Q) | (R & S) | (P & S)'), max_clauses=4)
    Traceback (most recent call last):
    ...
    proplogic.support.excepthook.ResourceLimitError: distribution would produce 8 clauses, more than the limit 4
    """
    results: list[Formula] = []
    stack: list[tuple[Formula, bool]] = [(phi, False)]
    while stack:
        f, expanded = stack.pop()
        if is_literal(f):
            results.append(And(Or(f)))
        elif f.op is not And and f.op is not Or:
            raise PreconditionError(
                f'nnf_to_cnf expects a formula in negation normal form, '
                f'found {f.op.__name__}')
        elif not f.args:
            results.append(And() if f.op is And else And(Or()))
        elif not expanded:
            stack.append((f, True))
            stack.extend((arg, False) for arg in reversed(f.args))
        else:
            n = len(f.args)
            cnfs = results[len(results) - n:]
            del results[len(results) - n:]
            if f.op is And:
                results.append(And(*(clause for cnf in cnfs for clause in cnf.args)))
            else:
                results.append(_distribute_all(cnfs, max_clauses))
    assert len(results) == 1, results
    return results[0]


def _distribute_all(cnfs: list[Formula], max_clauses: Optional[int]) -> Formula:
    result = cnfs[0]
    for cnf in cnfs[1:]:
        n = len(result.args) * len(cnf.args)
        if max_clauses is not None and n > max_clauses:
            raise ResourceLimitError(
                f'distribution would produce {n} clauses, more than the '
                f'limit {max_clauses}')
        result = _splice(And, _distribute(result, cnf))
    return result


def _distribute(phi_1: Formula, phi_2: Formula) -> Formula:
    # (C1 & ... & Cn) | D == (C1 | D) & ... & (Cn | D), and symmetrically.
    if Formula.is_and(phi_1):
        return And(*[_distribute(arg, phi_2) for arg in phi_1.args])
    if Formula.is_and(phi_2):
        return And(*[_distribute(phi_1, arg) for arg in phi_2.args])
    return Or(phi_1, phi_2)


def _splice(op: type[And | Or], phi: Formula) -> Formula:
    # Splice arguments of arguments with operator op into phi, one level.
    args: list[Formula] = []
    for arg in phi.args:
        if arg.op is op:
            args.extend(arg.args)
        else:
            args.append(arg)
    return op(*args)


def flatten(phi: Formula) -> Formula:
    """Flatten the formula `phi`. Nested applications of :class:`.And` within
    :class:`.And` and of :class:`.Or` within :class:`.Or` are merged.

    >>> from proplogic import VV, And, Or
    >>> P, Q, R = VV.get('P', 'Q', 'R')
    >>> flatten(And(And(P, Q), Or(Or(P), Or(Q, R)), And()))
    And(P, Q, Or(P, Q, R))
    >>> flatten(Not(Or(Or(P, Q), R)))
    Not(Or(P, Q, R))

    The transformation is bottom-up and iterative, so that there is no limit
    on the depth of `phi`. It is idempotent.
    """
    results: list[Formula] = []
    stack: list[tuple[Formula, bool]] = [(phi, False)]
    while stack:
        f, expanded = stack.pop()
        if isinstance(f, Var) or not f.args:
            results.append(f)
        elif not expanded:
            stack.append((f, True))
            for arg in reversed(f.args):
                stack.append((arg, False))
        else:
            n = len(f.args)
            args = results[len(results) - n:]
            del results[len(results) - n:]
            if f.op is And or f.op is Or:
                flat_args: list[Formula] = []
                for arg in args:
                    if arg.op is f.op:
                        flat_args.extend(arg.args)
                    else:
                        flat_args.append(arg)
                args = flat_args
            results.append(f.op(*args))
    assert len(results) == 1, results
    return results[0]


def reduce_cnf(ucnf: Formula) -> Formula:
    """Reduce a flat CNF `ucnf`, whose clauses contain only literals:

    1. A clause is trivially true if it contains some atom and its negation,
       or if it contains :data:`.T` or ``Not(F)``. Such clauses are deleted.

    2. :data:`.F` and ``Not(T)`` are deleted from clauses.

    3. If some clause becomes empty, the result is :data:`.F`.

    4. Duplicate literals are deleted within clauses, and clauses with the
       same set of literals are deleted except for their first occurrence.

    5. If no clause remains, the result is :data:`.T`.

    Within a reduced clause the positive literals precede the negative ones.

    >>> from proplogic import VV
    >>> P, Q, R = VV.get('P', 'Q', 'R')
    >>> reduce_cnf(And(Or(~Q, P, F, P), Or(P, ~P, R), Or(P, ~Q), Or(~T, R)))
    And(Or(P, Not(Q)), Or(R))
    >>> reduce_cnf(And(Or(P), Or(F, ~T)))
    F
    >>> reduce_cnf(And(Or(P, Not(F))))
    T
    """
    diagnostic = explain_cnf(ucnf)
    if diagnostic is not None:
        raise PreconditionError(f'reduce_cnf expects a formula in CNF: {diagnostic}')
    if ucnf is T or ucnf is F:
        return ucnf
    clauses: dict[frozenset[Formula], Formula] = dict()
    empty_clause = False
    for clause in ucnf.args:
        reduced_clause = _reduce_clause(clause)
        if reduced_clause is None:
            continue
        if not reduced_clause.args:
            empty_clause = True
            break
        clauses.setdefault(frozenset(reduced_clause.args), reduced_clause)
    if empty_clause:
        return F
    if not clauses:
        return T
    return And(*clauses.values())


def _reduce_clause(clause: Formula) -> Optional[Formula]:
    # None means that the clause is trivially true.
    pos: dict[Formula, None] = dict()
    neg: dict[Formula, None] = dict()
    for literal in clause.args:
        if Formula.is_not(literal):
            neg[literal.arg] = None
        else:
            pos[literal] = None
    if not pos.keys().isdisjoint(neg.keys()) or T in pos or F in neg:
        return None
    pos_literals = [literal for literal in pos if literal is not F]
    neg_literals = [Not(literal) for literal in neg if literal is not T]
    return Or(*pos_literals, *neg_literals)


def dual(phi: Formula) -> Formula:
    """Map a reduced conjunctive normal form `phi` to a disjunctive normal form
    of ``Not(phi)``. Truth values are negated. Otherwise, :class:`.And`
    becomes :class:`.Or`, clauses become monoms, and each literal is
    replaced by its complement.

    >>> from proplogic import VV
    >>> P, Q, R = VV.get('P', 'Q', 'R')
    >>> dual(And(Or(P, Not(Q)), Or(R)))
    Or(And(Not(P), Q), And(Not(R)))
    >>> dual(T)
    F
    """
    match phi:
        case _T():
            return F
        case _F():
            return T
        case And(args=clauses):
            return Or(*(And(*(involutive_not(literal) for literal in clause.args))
                        for clause in clauses))
        case _:
            raise PreconditionError(f'dual expects a formula in CNF, found {phi.op.__name__}')


def _shape(phi: Any) -> str:
    if not isinstance(phi, Formula):
        return repr(phi)
    if isinstance(phi, Var) or not phi.args:
        return repr(phi)
    return f'{phi.op.__name__}(...)'


def _explain_normal_form(phi: Any, outer: type[And | Or], name: str) -> Optional[Diagnostic]:
    inner = outer.dual()
    part = 'clause' if outer is And else 'monom'
    if not isinstance(phi, Formula):
        return Diagnostic((), 'not a formula', f'a formula in {name}', _shape(phi))
    if phi is T or phi is F:
        return None
    if phi.op is not outer:
        return Diagnostic(
            (), f'not in {name}', f'{outer.__name__}(...) or a truth value', _shape(phi))
    for i, clause in enumerate(phi.args):
        if clause.op is not inner:
            return Diagnostic((i, ), f'not a {part}', f'{inner.__name__}(...)', _shape(clause))
        for j, literal in enumerate(clause.args):
            if not is_literal(literal):
                return Diagnostic(
                    (i, j), 'not a literal',
                    'an atom, a truth value, or its negation', _shape(literal))
    return None


def explain_cnf(phi: Any) -> Optional[Diagnostic]:
    """Check whether `phi` is in conjunctive normal form. Returns :obj:`None`
    if so, and a :class:`.Diagnostic` describing the first violation
    otherwise. The check is purely structural.

    >>> from proplogic import parse
    >>> explain_cnf(parse('And(Or(P, ~Q), Or())')) is None
    True
    >>> print(explain_cnf(parse('And(Or(P, ~~Q))')))
    not a literal at args[0][1]: expected an atom, a truth value, or its negation, found Not(...)
    >>> print(explain_cnf(parse('And(P)')))
    not a clause at args[0]: expected Or(...), found P
    """
    return _explain_normal_form(phi, And, 'CNF')


def is_cnf(phi: Any) -> bool:
    """Is `phi` in conjunctive normal form?

    >>> from proplogic import parse
    >>> is_cnf(parse('And(Or(P, ~Q), Or(R))')), is_cnf(T), is_cnf(parse('P | Q'))
    (True, True, False)
    """
    return explain_cnf(phi) is None


def explain_dnf(phi: Any) -> Optional[Diagnostic]:
    """Check whether `phi` is in disjunctive normal form. Returns :obj:`None`
    if so, and a :class:`.Diagnostic` describing the first violation
    otherwise.

    >>> from proplogic import parse
    >>> print(explain_dnf(parse('And(Or(P))')))
    not in DNF at root: expected Or(...) or a truth value, found And(...)
    """
    return _explain_normal_form(phi, Or, 'DNF')


def is_dnf(phi: Any) -> bool:
    """Is `phi` in disjunctive normal form?

    >>> from proplogic import parse
    >>> is_dnf(parse('Or(And(P, ~Q), And())')), is_dnf(F), is_dnf(parse('P'))
    (True, True, False)
    """
    return explain_dnf(phi) is None


@dataclass
class Options:
    """This class holds options that can be provided to
    :meth:`.BooleanNormalForm.__call__` as keyword arguments.
    """

    log_level: int
    """The `log_level` of the logger used by :class:`.BooleanNormalForm`.
    """

    max_clauses: Optional[int]
    """The maximal number of clauses produced by a single distribution step,
    or :obj:`None` for no limit.
    """

    max_depth: Optional[int]
    """The maximal depth of input formulas, or :obj:`None` for no limit.
    All stages of the pipeline are iterative, so that the depth is limited
    only by this option.
    """

    def __init__(self, log_level: int = logging.NOTSET,
                 max_clauses: Optional[int] = MAX_CLAUSES,
                 max_depth: Optional[int] = None) -> None:
        if max_clauses is not None and max_clauses < 0:
            raise ValueError(f'negative max_clauses: {max_clauses}')
        if max_depth is not None and max_depth < 0:
            raise ValueError(f'negative max_depth: {max_depth}')
        self.log_level = log_level
        self.max_clauses = max_clauses
        self.max_depth = max_depth


@dataclass(frozen=True)
class BooleanNormalForm:
    """A callable class computing conjunctive normal forms, or disjunctive
    normal forms with ``dualize=True``. Instances hold no state of
    computations, so that they can be used concurrently.
    """

    dualize: bool = False

    def __call__(self, f: Any, **options) -> Formula:
        """The entry point of the callable class :class:`BooleanNormalForm`.

        :param f:
          A formula, or its list representation.

        :param `**options`:
          Keyword arguments with keywords corresponding to attributes of
          :class:`Options`.

        :returns:
          An equivalent of `f` in CNF or DNF, or a truth value.

        >>> from proplogic import parse
        >>> cnf(['equiv', 'P', 'Q'])
        And(Or(Q, Not(P)), Or(P, Not(Q)))
        >>> dnf(parse('P == Q'))
        Or(And(Not(P), Not(Q)), And(Q, P))
        >>> dnf(parse('P & ~P'))
        F
        >>> cnf(parse('Xor(P, Q)'), max_clauses=2, log_level=logging.CRITICAL)
        Traceback (most recent call last):
        ...
        proplogic.support.excepthook.ResourceLimitError: distribution would produce 4 clauses, more than the limit 2
        """
        timer = Timer()
        delta_time_formatter.set_reference_time(time.time())
        opts = Options(**options)
        f = load(f, allow_reserved=True)
        with temporary_level(logger, opts.log_level):
            logger.info(f'{self}: {opts}')
            if self.dualize:
                result = dual(self.cnf(Not(f), opts))
            else:
                result = self.cnf(f, opts)
            if logger.isEnabledFor(logging.INFO):
                logger.info(f'finished with {_size(result)} after {timer.get():.3f} s')
        return result

    def cnf(self, f: Formula, options: Options) -> Formula:
        """Run the rewrite pipeline from :func:`eliminate_derived` to
        :func:`reduce_cnf` on `f`.
        """
        check_depth(f, options.max_depth)
        stages = [
            ('eliminate_derived', eliminate_derived),
            ('to_nnf', to_nnf),
            ('nnf_to_cnf', lambda f: nnf_to_cnf(f, options.max_clauses)),
            ('flatten', flatten),
            ('reduce_cnf', reduce_cnf)]
        timer = Timer()
        for name, stage in stages:
            timer.reset()
            f = stage(f)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f'{name}: {_size(f)} in {timer.get():.3f} s')
        return f


def _size(f: Formula) -> str:
    if f is T or f is F:
        return f'truth value {f}'
    if f.op is And or f.op is Or:
        return f'{len(f.args)} arguments'
    return f'{f.op.__name__}'


cnf = BooleanNormalForm()
"""User interface for the computation of a conjunctive normal form.
"""

dnf = BooleanNormalForm(dualize=True)
"""User interface for the computation of a disjunctive normal form.
"""

