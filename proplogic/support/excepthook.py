import sys
from typing import Any, Optional
from types import TracebackType

import IPython


class NoTraceException(Exception):
    """An exception that prints an error message and exits without a
    traceback. This is used in situations that do not require inspection of
    the code. Examples are malformed user input or formulas that are too
    large for exhaustive enumeration. Both are considered normal situations
    during interactive use. This exception typically comes with a short but
    informative error message for the user.
    """
    pass


class ResourceLimitError(NoTraceException):
    """Raised when a computation would exceed a fixed resource limit, e.g., a
    truth table with more than 1024 rows, a formula deeper than a
    requested `max_depth`, or a CNF distribution producing too many clauses.

    >>> raise ResourceLimitError('too large')
    Traceback (most recent call last):
    ...
    proplogic.support.excepthook.ResourceLimitError: too large
    """
    pass


def handler(exc: NoTraceException, tb: Optional[TracebackType]):
    print(f'{type(exc).__name__}: {exc.args[0]}', file=sys.stderr, flush=True)


# Python shell

def excepthook(exc_type: type[BaseException], exc: BaseException, tb: Optional[TracebackType]):
    if isinstance(exc, NoTraceException):
        handler(exc, tb)
    else:
        sys_excepthook(exc_type, exc, tb)


# To be executed at import:

sys_excepthook = sys.excepthook
sys.excepthook = excepthook


# IPython:

def ipy_custom_exc(ipy: Any, exc_type: type[NoTraceException],
                   exc: NoTraceException, tb: TracebackType, tb_offset=None):
    handler(exc, tb)


# To be executed at import:

ipy = IPython.get_ipython()

if ipy is not None:
    ipy.set_custom_exc((NoTraceException,), ipy_custom_exc)
