import io

import pytest

from slackmoji.core.errors import ApiError, SinkSetupError
from slackmoji.core.exception_handler import ExceptionHandler
from slackmoji.core.logger import Logger
from slackmoji.util.io import SGRRegistry, fmt_sizeof


@pytest.mark.parametrize('num, expected', [
    (0, '    0 b'),
    (1023, ' 1023 b'),
    (1536, ' 1.50 kb'),
    (20 * 1024 * 1024, '20.00 Mb'),
])
def test_fmt_sizeof(num, expected):
    assert fmt_sizeof(num) == expected


class TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestLogger:
    def test_debug_only_when_verbose(self):
        console = io.StringIO()
        logger = Logger(console=console)
        logger.debug('hidden')
        logger.verbose = True
        logger.debug('shown')

        assert console.getvalue() == 'shown\n'

    def test_colors_only_on_tty(self):
        plain, tty = io.StringIO(), TtyStream()
        Logger(console=plain).error('oops')
        Logger(console=tty).error('oops')

        assert plain.getvalue() == 'oops\n'
        assert tty.getvalue() == f'{SGRRegistry.FMT_RED}oops{SGRRegistry.FMT_RESET}\n'

    def test_file_gets_every_level(self, tmp_path):
        log_file = tmp_path / 'log'
        logger = Logger(filename=str(log_file), console=io.StringIO())
        logger.debug('dbg')
        logger.warn('careful')
        logger.close_io()

        lines = log_file.read_text(encoding='utf-8').splitlines()
        assert lines[-2].endswith('SLACKMOJI DEBUG: dbg')
        assert lines[-1].endswith('SLACKMOJI WARN: careful')


class TestExceptionHandler:
    def test_trace_goes_to_logger_console(self, monkeypatch):
        monkeypatch.setenv('EXCEPTION_TRACE', '1')
        console = io.StringIO()
        handler = ExceptionHandler(Logger(console=console))

        try:
            raise ApiError({'error': 'invalid_auth'})
        except ApiError as e:
            with pytest.raises(SystemExit) as exc_info:
                handler.handle(e)

        assert exc_info.value.code == 1
        output = console.getvalue()
        assert 'invalid_auth' in output
        assert 'Traceback (most recent call last)' in output

    def test_exit_code_comes_from_error(self):
        handler = ExceptionHandler(Logger(console=io.StringIO()))

        with pytest.raises(SystemExit) as exc_info:
            handler.handle(SinkSetupError('out.json', OSError('denied')))

        assert exc_info.value.code == 2
