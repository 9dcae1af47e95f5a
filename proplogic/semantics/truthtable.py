"""Truth tables.

The truth table of a formula `phi` with atoms :math:`a_1, \\dots, a_n` in
lexicographic order lists the value of `phi` for all :math:`2^n`
assignments. Rows are in binary counting order with ``True`` as 1 and
``False`` as 0, counting downwards, where :math:`a_1` is the most
significant bit:

>>> from proplogic import parse
>>> tt = truth_table(parse('P & Q'))
>>> tt.header
('P', 'Q', 'result')
>>> tt.rows
((True, True, True), (True, False, False), (False, True, False), (False, False, False))
>>> print(tt)
| P | Q | result |
|---+---+--------|
| T | T |      T |
| T | F |      F |
| F | T |      F |
| F | F |      F |

Exhaustive enumeration is restricted to formulas with at most
:data:`MAX_ATOMS` atoms. Larger problems should be addressed with a
satisfiability procedure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import partial
import itertools
import logging
import multiprocessing as mp
import time
from typing import Any, Final

from .evaluate import atoms_of, postfix, run
from ..syntax import Formula
from ..support.excepthook import ResourceLimitError
from ..support.logging import create_logger, RateFilter, temporary_level, Timer

from ..support.tracing import trace  # noqa


logger, delta_time_formatter = create_logger(__name__)
rate_filter = RateFilter()
logger.addFilter(rate_filter)


MAX_ATOMS: Final = 10
"""The maximal number of atoms of formulas admitted for
:func:`truth_table`. This is a fixed limit, not an option.
"""

RESULT: Final = 'result'
"""The last entry of :attr:`TruthTable.header`.
"""


class Mode(Enum):
    """Selects the rows of a :class:`TruthTable`.
    """

    ALL = 'all'
    """All rows.
    """

    TRUE_ONLY = 'true_only'
    """Only rows where the formula evaluates to ``True``.
    """

    FALSE_ONLY = 'false_only'
    """Only rows where the formula evaluates to ``False``.
    """


@dataclass(frozen=True)
class TruthTable:
    """The truth table of :attr:`phi`. Each row holds the values of the atoms
    in the order of :attr:`header` followed by the value of :attr:`phi`.
    """

    phi: Formula

    header: tuple[str, ...]
    """The sorted names of the atoms of :attr:`phi` followed by
    :data:`RESULT`.
    """

    rows: tuple[tuple[bool, ...], ...]

    def __str__(self) -> str:
        widths = [len(name) for name in self.header]
        lines = ['| ' + ' | '.join(self.header) + ' |',
                 '|-' + '-+-'.join('-' * w for w in widths) + '-|']
        for row in self.rows:
            cells = ('T' if value else 'F' for value in row)
            lines.append('| ' + ' | '.join(f'{c:>{w}}' for c, w in zip(cells, widths)) + ' |')
        return '\n'.join(lines)

    def as_dict(self) -> dict[str, Any]:
        """The external representation of the truth table.

        >>> from proplogic import parse
        >>> truth_table(parse('~P'), Mode.TRUE_ONLY).as_dict()
        {'phi': ['not', 'P'], 'header': ['P', 'result'], 'table': [[False, True]]}
        """
        return {'phi': self.phi.as_list(),
                'header': list(self.header),
                'table': [list(row) for row in self.rows]}


def truth_table(phi: Formula, mode: Mode | str = Mode.ALL, workers: int = 0,
                log_level: int = logging.NOTSET, log_rate: float = 0.5) -> TruthTable:
    """Compute the truth table of `phi`.

    :param mode:
      Selects rows, see :class:`Mode`. The values of :class:`Mode` are
      accepted as strings.

    :param workers:
      With the default ``workers=0`` rows are computed sequentially. A
      positive number specifies the size of a process pool. The order of
      rows does not depend on `workers`.

    :param log_level:
      Temporarily set the level of the module logger.

    :param log_rate:
      The minimal timespan (in s) between two logs of individual rows.

    >>> from proplogic import parse
    >>> tt = truth_table(parse('P >> Q'), mode='false_only')
    >>> tt.rows
    ((True, False, False),)

    >>> f = parse('And(' + ', '.join(f'P{i}' for i in range(11)) + ')')
    >>> truth_table(f)
    Traceback (most recent call last):
    ...
    proplogic.support.excepthook.ResourceLimitError: the formula has 11 atoms; its truth table would have more than 1024 rows, so you might want to use a satisfiability procedure instead
    """
    mode = Mode(mode)
    if workers < 0:
        raise ValueError(f'negative number of workers: {workers}')
    atoms = atoms_of(phi)
    if len(atoms) > MAX_ATOMS:
        raise ResourceLimitError(
            f'the formula has {len(atoms)} atoms; its truth table would have more '
            f'than {2 ** MAX_ATOMS} rows, so you might want to use a '
            f'satisfiability procedure instead')
    timer = Timer()
    delta_time_formatter.set_reference_time(time.time())
    rate_filter.set_rate(log_rate)
    with temporary_level(logger, log_level):
        logger.info(f'{len(atoms)} atoms, {2 ** len(atoms)} assignments, {mode=}, {workers=}')
        assignments = itertools.product((True, False), repeat=len(atoms))
        row = partial(_row, postfix(phi), tuple(atoms))
        if workers:
            with mp.Pool(workers) as pool:
                rows = pool.map(row, assignments)
        else:
            rows = []
            for values in assignments:
                rows.append(row(values))
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(f'row {len(rows)}: {rows[-1]}')
        match mode:
            case Mode.TRUE_ONLY:
                rows = [r for r in rows if r[-1]]
            case Mode.FALSE_ONLY:
                rows = [r for r in rows if not r[-1]]
        logger.info(f'{len(rows)} rows in {timer.get():.3f} s')
    return TruthTable(phi, (*atoms, RESULT), tuple(rows))


def _row(code: list[tuple[str, Any]], atoms: tuple[str, ...],
         values: tuple[bool, ...]) -> tuple[bool, ...]:
    return (*values, run(code, dict(zip(atoms, values))))
