# -----------------------------------------------------------------------------
# output sinks for serialized emoji definitions
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

import abc
import os
import sys
from typing import TextIO

from slackmoji.core.emoji import is_safe_name
from slackmoji.core.errors import SinkSetupError, SinkWriteError

STDOUT_TOKEN = '-'


class OutputSink(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def write(self, name: str, text: str) -> int:
        """Write one serialized record followed by a newline.

        Returns the amount of characters written, i.e. ``len(text) + 1``.
        Raises ``SinkWriteError``; the sink stays usable for further writes.
        """
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self) -> OutputSink:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class StreamSink(OutputSink):
    def __init__(self, stream: TextIO|None = None):
        self._stream: TextIO = stream or sys.stdout

    def write(self, name: str, text: str) -> int:
        try:
            self._stream.write(text + '\n')
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError(name, e) from e
        return len(text) + 1


class FileSink(OutputSink):
    def __init__(self, filepath: str):
        self._filepath = filepath
        try:
            self._fp: TextIO = open(filepath, 'w', encoding='utf-8', newline='')
        except OSError as e:
            raise SinkSetupError(filepath, e) from e

    @property
    def filepath(self) -> str:
        return self._filepath

    def write(self, name: str, text: str) -> int:
        try:
            self._fp.write(text + '\n')
            self._fp.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError(name, e) from e
        return len(text) + 1

    def close(self):
        if not self._fp.closed:
            self._fp.close()


class DirectorySink(OutputSink):
    EXTENSION = '.json'

    def __init__(self, dirpath: str):
        self._dirpath = dirpath

    @property
    def dirpath(self) -> str:
        return self._dirpath

    def get_filepath(self, name: str) -> str:
        return os.path.join(self._dirpath, name + self.EXTENSION)

    def write(self, name: str, text: str) -> int:
        if not is_safe_name(name):
            raise SinkWriteError(name, ValueError('not usable as a file name'))
        try:
            if not os.path.isdir(self._dirpath):
                os.makedirs(self._dirpath, exist_ok=True)
            with open(self.get_filepath(name), 'w', encoding='utf-8', newline='') as fp:
                fp.write(text + '\n')
        except OSError as e:
            raise SinkWriteError(name, e) from e
        return len(text) + 1


def create_sink(destination: str|None, stream: TextIO|None = None) -> OutputSink:
    if destination is None or destination == STDOUT_TOKEN:
        return StreamSink(stream)
    if os.path.isdir(destination) or destination.endswith(os.sep):
        return DirectorySink(destination)
    return FileSink(destination)
