"""Atomic propositions. An atom is identified by its name, which is a
:external:class:`str` matching ``[A-Za-z][A-Za-z0-9_]*``. Operator keywords
and the truth value names ``T``, ``true``, ``F``, ``false`` are not
admissible as names. Names starting with :data:`RESERVED_PREFIX` are reserved
for atoms generated by tools. The reservation is checked only where user
input enters the system, i.e., by :func:`.parser.parse` and
:func:`.sexpr.load`, so that internal computations remain free to create
such atoms.
"""

from __future__ import annotations

import inspect
import re
from types import FrameType
from typing import Final, final

from IPython.lib import pretty

from .formula import Formula

from ..support.tracing import trace  # noqa


NAME_PATTERN: Final = re.compile(r'[A-Za-z][A-Za-z0-9_]*')

RESERVED_PREFIX: Final = 'ts_'
"""Prefix of names of machine-generated atoms.
"""


@final
class Var(Formula):
    """An atomic proposition.

    >>> Var('P')
    P
    >>> Var('P') == Var('P')
    True

    The constructor does not check the name. Use :data:`VV` or
    :func:`.wff.check_wff` for checked construction.
    """

    def __init__(self, name: str) -> None:
        super().__init__()
        assert isinstance(name, str), name
        self.args = (name, )

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name

    @property
    def name(self) -> str:
        """The name of the atom.
        """
        return self.args[0]

    def as_latex(self) -> str:
        r"""LaTeX representation as a string.

        >>> Var('ts_1').as_latex()
        'ts\\_1'
        """
        return self.name.replace('_', '\\_')

    def _repr_pretty_(self, p: pretty.RepresentationPrinter, cycle: bool) -> None:
        p.text(self.name)


class VariableSet:
    """The infinite set of all atoms. Atoms are uniquely identified by their
    name. This class is a singleton, whose unique instance is assigned to
    the module variable :data:`VV`.

    In contrast to the constructor of :class:`Var`, this interface checks
    names:

    >>> VV['P']
    P
    >>> VV['and']
    Traceback (most recent call last):
    ...
    proplogic.syntax.wff.GrammarError: illegal atom name 'and' at root: expected an identifier that is not an operator keyword or a truth value, found 'and'
    """

    _instance: VariableSet | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __getitem__(self, index: str) -> Var:
        """Obtain the atom with name `index`.
        """
        from .wff import check_wff
        check_wff(index)
        return Var(index)

    def __repr__(self) -> str:
        return 'VV'

    @final
    def get(self, *args: str) -> tuple[Var, ...]:
        """Obtain several atoms simultaneously by their names.

        >>> P, Q = VV.get('P', 'Q')
        >>> P & Q
        And(P, Q)

        .. seealso::
          * :meth:`__getitem__` -- obtain an atom by its name
          * :meth:`imp` -- import atoms into global namespace
        """
        return tuple(self[name] for name in args)

    @final
    def imp(self, *args: str) -> None:
        """Import atoms into global namespace. This works only interactively,
        i.e., ``if __name__ == '__main__'``. Otherwise use :meth:`.get`.

        >>> if __name__ == '__main__':  # to prevent doctest failure
        ...     VV.imp('P', 'Q')
        ...     assert isinstance(P, Var)
        """
        vars_ = self.get(*args)
        frame = inspect.currentframe()
        assert isinstance(frame, FrameType)
        frame = frame.f_back
        try:
            assert isinstance(frame, FrameType)
            module = frame.f_globals['__name__']
            if module != '__main__':
                raise RuntimeError(
                    f'expecting imp to be called from the top level of module __main__; '
                    f'context is module {module}')
            function = frame.f_code.co_name
            if function != '<module>':
                raise RuntimeError(
                    f'expecting imp to be called from the top level of module __main__; '
                    f'context is function {function} in module {module}')
            for v in vars_:
                frame.f_globals[str(v)] = v
        finally:
            # Compare Note here:
            # https://docs.python.org/3/library/inspect.html#inspect.Traceback
            del frame


VV = VariableSet()
"""The unique instance of :class:`VariableSet`.
"""
