"""Models and evaluation.

A model for a formula is a mapping from the names of its atoms into
:external:class:`bool`. Models may contain further atoms, which are
ignored. Evaluation interprets the formula bottom-up against the model;
the derived operators are evaluated directly, in agreement with their
definitions

* ``Implies(P, Q)`` as ``Or(Not(P), Q)``,
* ``Equivalent(P, Q)`` as ``And(Implies(P, Q), Implies(Q, P))``,
* ``Xor(P, Q)`` as ``Not(Equivalent(P, Q))``,
* ``Ite(P, Q, R)`` as ``Or(And(P, Q), And(Not(P), R))``,

which are used by :func:`.bnf.eliminate_derived`.
"""

from __future__ import annotations

from typing import Any, Callable, Final, Mapping, Optional, Sequence

from ..syntax import Formula, Var, _F, _T, T
from ..support.excepthook import ResourceLimitError

from ..support.tracing import trace  # noqa


class PreconditionError(Exception):
    """Raised when a function is called in violation of its contract, e.g.,
    when a model does not assign values to all atoms of a formula.
    """

    def __init__(self, message: str, missing: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing = list(missing)


def atoms_of(phi: Formula) -> list[str]:
    """The sorted list of the names of the atoms occurring in `phi`, without
    duplicates.

    >>> from proplogic import parse
    >>> atoms_of(parse('(Q | ~P) & Ite(R, P, T)'))
    ['P', 'Q', 'R']
    >>> atoms_of(parse('T | F'))
    []
    """
    return sorted({atom.name for atom in phi.atoms()})


def check_depth(phi: Formula, max_depth: Optional[int]) -> None:
    """Raise :exc:`.ResourceLimitError` if the depth of `phi` exceeds
    `max_depth`. :obj:`None` means no limit.

    >>> from proplogic import VV, Not
    >>> P, = VV.get('P')
    >>> f = P
    >>> for i in range(5):
    ...     f = Not(f)
    >>> check_depth(f, 4)
    Traceback (most recent call last):
    ...
    proplogic.support.excepthook.ResourceLimitError: formula depth 5 exceeds the limit 4
    """
    if max_depth is None:
        return
    depth = phi.depth()
    if depth > max_depth:
        raise ResourceLimitError(f'formula depth {depth} exceeds the limit {max_depth}')


def evaluate(phi: Formula, model: Mapping[str | Var, bool]) -> bool:
    """Evaluate `phi` in `model`. The keys of `model` are atom names or atoms.

    >>> from proplogic import parse
    >>> f = parse('(P >> Q) == (~Q >> ~P)')
    >>> evaluate(f, {'P': True, 'Q': False})
    True
    >>> evaluate(parse('Xor(P, Q)'), {'P': True, 'Q': True, 'R': False})
    False
    >>> evaluate(parse('And()'), {}), evaluate(parse('Or()'), {})
    (True, False)

    All atoms of `phi` must be assigned a value:

    >>> evaluate(parse('P & Q & R'), {'Q': True})
    Traceback (most recent call last):
    ...
    proplogic.semantics.evaluate.PreconditionError: model does not assign values to P, R
    """
    model = {key.name if isinstance(key, Var) else key: value
             for key, value in model.items()}
    missing = [name for name in atoms_of(phi) if name not in model]
    if missing:
        raise PreconditionError(
            f'model does not assign values to {", ".join(missing)}', missing)
    return _evaluate(phi, model)


_OPERATIONS: Final[dict[str, Callable[[list[bool]], bool]]] = {
    'not': lambda args: not args[0],
    'and': all,
    'or': any,
    'impl': lambda args: not args[0] or args[1],
    'equiv': lambda args: args[0] == args[1],
    'xor': lambda args: args[0] != args[1],
    'ite': lambda args: args[1] if args[0] else args[2]}


def postfix(phi: Formula) -> list[tuple[str, Any]]:
    """Compile `phi` into a flat postfix program. Atoms become ``('atom',
    name)``, truth values become ``('const', value)``, and operators become
    ``(keyword, number of arguments)``. Programs can be pickled independently
    of the depth of `phi`, which is used for sending formulas to worker
    processes.

    >>> from proplogic import parse
    >>> postfix(parse('~P | And()'))
    [('atom', 'P'), ('not', 1), ('and', 0), ('or', 2)]
    """
    code: list[tuple[str, Any]] = []
    stack: list[tuple[Formula, bool]] = [(phi, False)]
    while stack:
        f, expanded = stack.pop()
        match f:
            case Var(name=name):
                code.append(('atom', name))
            case _T() | _F():
                code.append(('const', f is T))
            case _ if expanded or not f.args:
                code.append((f.keyword, len(f.args)))
            case _:
                stack.append((f, True))
                stack.extend((arg, False) for arg in reversed(f.args))
    return code


def run(code: list[tuple[str, Any]], model: Mapping[str, bool]) -> bool:
    """Evaluate the postfix program `code` in `model`.
    """
    stack: list[bool] = []
    for op, arg in code:
        match op:
            case 'atom':
                stack.append(bool(model[arg]))
            case 'const':
                stack.append(arg)
            case _:
                values = stack[len(stack) - arg:]
                del stack[len(stack) - arg:]
                stack.append(_OPERATIONS[op](values))
    assert len(stack) == 1, stack
    return stack[0]


def _evaluate(phi: Formula, model: Mapping[str, bool]) -> bool:
    return run(postfix(phi), model)
