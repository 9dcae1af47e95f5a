"""Logging support shared by the normal form and truth table modules. All
loggers of :mod:`proplogic` are created via :func:`create_logger`. They do
not propagate to the root logger, write to :data:`sys.stderr`, and are
silent below :data:`logging.WARNING` unless a caller passes a `log_level`
option.
"""

from contextlib import contextmanager
import datetime
import logging
import threading
import time
from typing import Iterator


class DeltaTimeFormatter(logging.Formatter):
    """Allows to log the time relative to a reference time by adding an
    attribute `delta` to the :class:`.logging.LogRecord`.

    >>> import logging, sys, time
    >>> logger = logging.getLogger('demo')
    >>> stream_handler = logging.StreamHandler(stream=sys.stdout)
    >>> delta_time_formatter = DeltaTimeFormatter('%(delta)s: %(message)s')
    >>> stream_handler.setFormatter(delta_time_formatter)
    >>> logger.addHandler(stream_handler)
    >>> delta_time_formatter.set_reference_time(time.time())
    >>> logger.warning('distributing 3 clauses')  # doctest: +SKIP
    0:00:00.002: distributing 3 clauses
    """

    _time_since_start_time = time.time() - logging._startTime  # type: ignore

    def format(self, record: logging.LogRecord) -> str:
        timestamp = record.relativeCreated / 1000 - self._time_since_start_time
        delta = datetime.timedelta(seconds=timestamp)
        record.delta = str(delta)[:-3]
        return super().format(record)

    def get_reference_time(self) -> float:
        """Get the reference time in seconds since the :ref:`epoch <epoch>`.
        This is compatible with the output of :func:`.time.time`.
        """
        return self._time_since_start_time + logging._startTime  # type: ignore

    def set_reference_time(self, reference_time: float) -> None:
        """Set the reference time to `reference_time` seconds since the
        :ref:`epoch <epoch>`.
        """
        self._time_since_start_time = reference_time - logging._startTime  # type: ignore


class RateFilter(logging.Filter):
    """Allows to specify a log rate, which is the minimal time in seconds
    that has to pass between two logs. Records with a level of
    :data:`logging.INFO` or higher always pass. The initial rate is 0.0.

    >>> rate_filter = RateFilter()
    >>> rate_filter.set_rate(3600.0)
    >>> record = logging.LogRecord('demo', logging.DEBUG, '', 0, 'row', None, None)
    >>> rate_filter.filter(record)
    True
    >>> rate_filter.filter(record)
    False
    >>> rate_filter.off()
    >>> rate_filter.filter(record)
    True
    """

    def __init__(self) -> None:
        super().__init__()
        self.active = True
        self.last_log = 0.0
        self.rate = 0.0

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.active or record.levelno >= logging.INFO:
            return True
        now = time.time()
        if now - self.last_log >= self.rate:
            self.last_log = now
            return True
        return False

    def off(self) -> None:
        """Turn filter off.
        """
        self.active = False

    def on(self) -> None:
        """Turn filter on.
        """
        self.active = True

    def set_rate(self, rate: float) -> None:
        """Set the log rate to `rate` seconds.
        """
        self.rate = rate


class Timer:
    """A simple timer measuring the wall time in seconds relative to the last
    :meth:`.reset`. Instances of the Timer are implicitly reset when they are
    created.

    >>> timer = Timer()
    >>> timer.get() >= 0.0
    True
    """

    def __init__(self) -> None:
        """Reset new instance.
        """
        self.reset()

    def get(self) -> float:
        """Get the wall time since last :meth:`.reset` in seconds.
        """
        return time.time() - self._reference_time

    def reset(self) -> None:
        """Reset the timer to 0.0 seconds.
        """
        self._reference_time = time.time()


def create_logger(name: str) -> tuple[logging.Logger, DeltaTimeFormatter]:
    """Create the logger `name` together with its formatter. The caller
    resets the reference time of the formatter at the start of each
    computation so that `delta` is relative to that start.

    >>> logger, formatter = create_logger('proplogic.demo')
    >>> logger.propagate
    False
    >>> logger.getEffectiveLevel() == logging.WARNING
    True
    """
    delta_time_formatter = DeltaTimeFormatter(
        '%(asctime)s - %(name)s - %(levelname)-5s - %(delta)s: %(message)s')
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(delta_time_formatter)
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.addHandler(stream_handler)
    logger.addFilter(lambda record: str(record.msg).strip() != '')
    logger.setLevel(logging.WARNING)
    return logger, delta_time_formatter


_level_lock = threading.Lock()
_level_requests: dict[str, list[int]] = {}
_saved_levels: dict[str, int] = {}


@contextmanager
def temporary_level(logger: logging.Logger, level: int) -> Iterator[logging.Logger]:
    """Temporarily set the level of `logger` to `level`. With
    :data:`logging.NOTSET` the current level is kept.

    Contexts may overlap, e.g., in concurrent threads. The logger then uses
    the most verbose level requested by any open context, and its original
    level is restored when the last context closes.

    >>> logger, _ = create_logger('proplogic.demo.level')
    >>> with temporary_level(logger, logging.DEBUG):
    ...     logger.getEffectiveLevel() == logging.DEBUG
    True
    >>> logger.getEffectiveLevel() == logging.WARNING
    True
    """
    if level == logging.NOTSET:
        yield logger
        return
    with _level_lock:
        requests = _level_requests.setdefault(logger.name, [])
        if not requests:
            _saved_levels[logger.name] = logger.level
        requests.append(level)
        logger.setLevel(min(requests))
    try:
        yield logger
    finally:
        with _level_lock:
            requests.remove(level)
            if requests:
                logger.setLevel(min(requests))
            else:
                del _level_requests[logger.name]
                logger.setLevel(_saved_levels.pop(logger.name))
