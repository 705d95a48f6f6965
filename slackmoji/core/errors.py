# -----------------------------------------------------------------------------
# error taxonomy shared by fetcher, sinks, reader and downloader
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict


class SlackmojiError(Exception):
    exit_code: int = 1


class TransportError(SlackmojiError):
    """Remote side could not be reached or answered with garbage/non-2xx."""

    def __init__(self, target: str, cause: Exception|str):
        self.target = target
        self.cause = cause
        super().__init__(f'API communication error ({target}): {cause!s}')


class ApiError(SlackmojiError):
    """Remote side answered with ``ok: false``."""

    def __init__(self, payload: Dict[str, Any]):
        self.payload = payload
        super().__init__(f'API responded with errors: {payload!s}')


class SerializationError(SlackmojiError):
    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f'{name}: Could not serialize: {cause!s}')


class SinkSetupError(SlackmojiError):
    exit_code = 2

    def __init__(self, destination: str, cause: Exception):
        self.destination = destination
        self.cause = cause
        super().__init__(f'Could not open output {destination}: {cause!s}')


class SinkWriteError(SlackmojiError):
    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f'{name}: Could not write: {cause!s}')


class ParseError(SlackmojiError):
    pass


class ReaderError(SlackmojiError):
    def __init__(self, message: str, exit_code: int = 1):
        self.exit_code = exit_code
        super().__init__(message)
