# Inspired by code suggested by Vincent Fenet,
# https://stackoverflow.com/q/8315389/

import sys
from functools import wraps
import pprint


class trace(object):
    """Implements a decorator @trace(...) on functions that should be traced.
    Parenthesis must be used also when there are no arguments. Formulas are
    shown via :func:`str` by default, which is much more compact than
    :func:`repr` for the nested terms produced by CNF distribution.

    >>> from proplogic import VV, Not
    >>> P, Q = VV.get('P', 'Q')
    >>> @trace(stream=sys.stdout)
    ... def negate(f):
    ...     return Not(f)
    >>> negate(P & Q)
    --> negate(P and Q)
    <-- negate == not (P and Q)
    <BLANKLINE>
    Not(And(P, Q))
    """

    def __init__(self, stream=sys.stdout, indent_step=2, show_ret=True,
                 pretty=False, as_str=True, max_width=200):
        self.as_str = as_str
        self.indent_step = indent_step
        self.max_width = max_width
        self.pretty = pretty
        self.show_ret = show_ret
        self.stream = stream
        # The following is a class attribute since we want to share the
        # indentation level between different traced functions, in case they
        # call each other:
        trace.cur_indent = 0

    def __call__(self, fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            indent = ' ' * trace.cur_indent
            L = []
            for a in args:
                L.append(self._format(a))
            for a, b in kwargs.items():
                L.append('%s=%s' % (a, self._format(b)))
            arg_str = ', '.join(L)
            call = f'{fn.__qualname__}({arg_str})'
            self.stream.write(f'{indent}--> {call}\n')
            trace.cur_indent += self.indent_step
            try:
                ret = fn(*args, **kwargs)
            finally:
                trace.cur_indent -= self.indent_step
            if self.show_ret:
                ret_str = self._format(ret)
                result = f'{fn.__qualname__} == {ret_str}\n'
                self.stream.write(f'{indent}<-- {result}\n')
            return ret
        return wrapper

    def _format(self, obj) -> str:
        if self.pretty:
            s = pprint.pformat(obj)
        elif self.as_str:
            s = str(obj)
        else:
            s = repr(obj)
        if len(s) > self.max_width:
            s = s[:self.max_width - 3] + '...'
        return s
