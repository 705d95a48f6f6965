# 2022 A. Shavykin <0.delameter@gmail.com>
# ----------------------------------------
from __future__ import annotations

import sys
from datetime import datetime
from typing import Optional, TextIO

from slackmoji.util.io import SGRRegistry, SGRSequence


class Logger:
    PREFIX = 'SLACKMOJI'

    _instance: Logger = None

    @classmethod
    def get_instance(cls, require_new: bool = False, *args, **kwargs) -> Logger:
        if cls._instance and not require_new:
            return cls._instance
        instance = cls(*args, **kwargs)
        if not cls._instance or require_new:
            cls._instance = instance
        return instance

    def __init__(self, filename: str|None = None, verbose: bool = False, console: TextIO|None = None):
        self.verbose = verbose
        # stdout can carry the emoji listing, so diagnostics never go there
        self._console: TextIO = console or sys.stderr
        self._fileio: Optional[TextIO] = None

        if filename:
            self._open_io(filename)

    def log(self, text: str, level: str = 'info'):
        if not self._fileio or self._fileio.closed:
            return

        dt, micro = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f").rsplit('.', 1)
        print(f'{dt}.{micro:.3s} {self.PREFIX} {level.upper()}: {text}',
              file=self._fileio, end='\n', flush=True)

    def debug(self, text: str, silent: bool|None = None):
        if silent is None:
            silent = not self.verbose
        if not silent:
            self.echo(text, SGRRegistry.FMT_CYAN)
        self.log(text, 'debug')

    def info(self, text: str, silent: bool = False):
        if not silent:
            self.echo(text)
        self.log(text, 'info')

    def warn(self, text: str, silent: bool = False):
        if not silent:
            self.echo(text, SGRRegistry.FMT_YELLOW)
        self.log(text, 'warn')

    def error(self, text: str, silent: bool = False):
        if not silent:
            self.echo(text, SGRRegistry.FMT_RED)
        self.log(text, 'error')

    def echo(self, text: str, color: SGRSequence|None = None):
        if color and self._console.isatty():
            text = f'{color!s}{text}{SGRRegistry.FMT_RESET!s}'
        print(text, file=self._console, flush=True)

    def _open_io(self, filename: str):
        try:
            self._fileio = open(filename, 'a', encoding='utf-8')
        except OSError as e:
            self.warn(f'Opening log file {filename} failed: {e}')
            return
        self.debug(f'Opened log file for appending: {filename}')

    def close_io(self):
        if not self._fileio:
            return
        self._fileio.flush()
        self._fileio.close()
        self._fileio = None
