from concurrent.futures import ThreadPoolExecutor
import io
import logging
import sys

from proplogic import GrammarError, NoTraceException, ResourceLimitError, cnf, parse
from proplogic.support import excepthook
from proplogic.support.logging import RateFilter, create_logger, temporary_level
from proplogic.support.tracing import trace


def test_error_hierarchy():
    assert issubclass(GrammarError, NoTraceException)
    assert issubclass(ResourceLimitError, NoTraceException)


def test_excepthook_is_installed():
    assert sys.excepthook is excepthook.excepthook


def test_excepthook_prints_message_only(capsys):
    try:
        parse('P +')
    except GrammarError as exc:
        excepthook.excepthook(type(exc), exc, exc.__traceback__)
    err = capsys.readouterr().err
    assert err.startswith('GrammarError: SyntaxError')
    assert 'Traceback' not in err


def test_temporary_level_restores_on_error():
    logger, formatter = create_logger('proplogic.tests.level')
    try:
        with temporary_level(logger, logging.DEBUG):
            assert logger.level == logging.DEBUG
            raise ValueError
    except ValueError:
        pass
    assert logger.level == logging.WARNING
    with temporary_level(logger, logging.NOTSET):
        assert logger.level == logging.WARNING


def test_temporary_level_overlapping():
    logger, formatter = create_logger('proplogic.tests.overlap')
    debug = temporary_level(logger, logging.DEBUG)
    info = temporary_level(logger, logging.INFO)
    debug.__enter__()
    info.__enter__()
    assert logger.level == logging.DEBUG
    debug.__exit__(None, None, None)
    assert logger.level == logging.INFO
    info.__exit__(None, None, None)
    assert logger.level == logging.WARNING


def test_temporary_level_threads():
    from proplogic.bnf import logger as bnf_logger
    level = bnf_logger.level
    phi = parse('(P & Q) | (R & S) | ~(P >> S)')
    log_levels = [logging.CRITICAL, logging.ERROR] * 20
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda log_level: cnf(phi, log_level=log_level), log_levels))
    assert all(result == cnf(phi) for result in results)
    assert bnf_logger.level == level


def test_rate_filter_passes_info():
    rate_filter = RateFilter()
    rate_filter.set_rate(3600.0)
    info = logging.LogRecord('demo', logging.INFO, '', 0, 'done', None, None)
    debug = logging.LogRecord('demo', logging.DEBUG, '', 0, 'row', None, None)
    assert rate_filter.filter(debug)
    assert not rate_filter.filter(debug)
    assert rate_filter.filter(info)


def test_trace_truncates():
    stream = io.StringIO()

    @trace(stream=stream, max_width=12)
    def identity(f):
        return f

    identity(parse('Alpha and Beta and Gamma'))
    first = stream.getvalue().splitlines()[0]
    assert first == '--> identity(Alpha and...)'
