# -----------------------------------------------------------------------------
# rate-limited batch emoji image download
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

import os
import posixpath
import time
from typing import Callable, Iterable, List, Tuple
from urllib.parse import urlsplit

import requests
from requests import Response, Session

from slackmoji.core.emoji import Emoji, is_safe_name
from slackmoji.core.errors import TransportError
from slackmoji.core.fetcher import create_session
from slackmoji.core.logger import Logger
from slackmoji.util.io import fmt_sizeof


class RequestPacer:
    """Spaces requests at most ``rate_per_sec`` per second.

    The next slot is computed from the previous slot's deadline rather than
    from the moment the previous request finished, so waiting never drifts.
    """

    def __init__(self, rate_per_sec: float,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self._interval = 1.0 / rate_per_sec
        self._clock = clock
        self._sleep = sleep
        self._deadline = clock()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def deadline(self) -> float:
        return self._deadline

    def wait(self):
        next_deadline = self._deadline + self._interval
        delay = next_deadline - self._clock()
        if delay > 0:
            self._sleep(delay)
        self._deadline = next_deadline


class DownloadPair:
    DEFAULT_EXTENSION = 'png'

    def __init__(self, name: str, url: str, filepath: str):
        self.name = name
        self.url = url
        self.filepath = filepath

    @staticmethod
    def get_extension(url: str) -> str:
        last_segment = posixpath.basename(urlsplit(url).path)
        _, ext = posixpath.splitext(last_segment)
        return ext.lstrip('.') or DownloadPair.DEFAULT_EXTENSION

    @staticmethod
    def from_emoji(emoji: Emoji, output_dir: str) -> DownloadPair:
        filename = f'{emoji.name}.{DownloadPair.get_extension(emoji.url)}'
        return DownloadPair(emoji.name, emoji.url, os.path.join(output_dir, filename))

    def __repr__(self) -> str:
        return f'DownloadPair({self.url!r} -> {self.filepath!r})'


def build_download_pairs(emojis: Iterable[Emoji], output_dir: str, logger: Logger|None = None) -> List[DownloadPair]:
    logger = logger or Logger.get_instance()
    pairs = []
    for emoji in emojis:
        if emoji.is_alias:
            # aliases point to another emoji by name, their url is not a distinct image
            logger.debug(f'Skipping alias: {emoji.name} -> {emoji.alias_for}')
            continue
        if not is_safe_name(emoji.name):
            logger.warn(f'Skipping emoji with unusable file name: {emoji.name!r}')
            continue
        pairs.append(DownloadPair.from_emoji(emoji, output_dir))
    return pairs


class DownloadReport:
    def __init__(self):
        self.downloaded = 0
        self.skipped = 0
        self.failed: List[Tuple[str, str]] = []

    @property
    def total(self) -> int:
        return self.downloaded + self.skipped + len(self.failed)

    def __str__(self) -> str:
        return f'{self.downloaded:n} downloaded, {self.skipped:n} skipped, {len(self.failed):n} failed'


class Downloader:
    RATE_PER_SEC = 20
    TIMEOUT_SEC = 15

    def __init__(self, session: Session|None = None, logger: Logger|None = None, pacer: RequestPacer|None = None):
        self._session: Session = session or create_session()
        self._logger: Logger = logger or Logger.get_instance()
        self._pacer = pacer

    def download_all(self, pairs: List[DownloadPair], force: bool = False) -> DownloadReport:
        report = DownloadReport()
        if len(pairs) == 0:
            self._logger.info('Received empty download list')
            return report

        self._logger.info(f'Downloading starts for {len(pairs):n} emojis')
        pacer = self._pacer or RequestPacer(self.RATE_PER_SEC)

        for idx, pair in enumerate(pairs, start=1):
            if not force and os.path.isfile(pair.filepath):
                self._logger.debug(f'[{idx}/{len(pairs)}] Already exists: {pair.filepath}')
                report.skipped += 1
                continue

            self._logger.debug(f'[{idx}/{len(pairs)}] Downloading {pair.url}')
            pacer.wait()
            try:
                content = self._fetch(pair.url)
            except TransportError as e:
                self._fail(report, pair, f'Could not request {pair.filepath}: {e.cause!s}')
                continue

            try:
                self._write(pair.filepath, content)
            except OSError as e:
                self._fail(report, pair, f'Could not write to {pair.filepath}: {e!s}')
                self._remove_partial(pair.filepath)
                continue
            report.downloaded += 1

        self._logger.info(f'All done: {report!s}')
        return report

    def _fetch(self, url: str) -> bytes:
        try:
            response: Response = self._session.get(url, timeout=self.TIMEOUT_SEC)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            raise TransportError(url, e) from e

    def _write(self, filepath: str, content: bytes):
        with open(filepath, 'wb') as fp:
            fp.write(content)
        self._logger.debug(f'Writing done: {filepath} ({fmt_sizeof(len(content)).strip()})')

    def _fail(self, report: DownloadReport, pair: DownloadPair, reason: str):
        self._logger.error(reason)
        report.failed.append((pair.filepath, reason))

    def _remove_partial(self, filepath: str):
        if not os.path.isfile(filepath):
            return
        try:
            os.remove(filepath)
        except OSError as e:
            self._logger.debug(f'Could not remove partial file {filepath}: {e!s}')
