# -----------------------------------------------------------------------------
# reading previously saved emoji definitions back
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import os
from typing import List

from slackmoji.core.emoji import Emoji
from slackmoji.core.errors import ParseError, ReaderError
from slackmoji.core.logger import Logger


# noinspection PyMethodMayBeStatic
class JsonReader:
    def read(self, filepath: str) -> Emoji:
        try:
            with open(filepath, 'r', encoding='utf-8') as fp:
                data = json.load(fp)
        except (OSError, ValueError) as e:
            raise ParseError(f'Reading failed: {filepath}: {e!s}') from e
        try:
            return Emoji.from_dict(data)
        except ParseError as e:
            raise ParseError(f'Parsing failed: {filepath}: {e!s}') from e


class EmojiDirectoryReader:
    EXTENSION = '.json'

    def __init__(self, logger: Logger|None = None):
        self._logger: Logger = logger or Logger.get_instance()
        self._json_reader = JsonReader()

    def read(self, dirpath: str) -> List[Emoji]:
        if not os.path.exists(dirpath):
            raise ReaderError(f'Specified path does not exist: {dirpath}')
        try:
            with os.scandir(dirpath) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise ReaderError(f'Could not read json files from directory: {e!s}', exit_code=2) from e

        emojis = []
        for entry in entries:
            if not entry.is_file() or not entry.name.endswith(self.EXTENSION):
                self._logger.debug(f'Ignoring: {entry.path}')
                continue
            try:
                emojis.append(self._json_reader.read(entry.path))
            except ParseError as e:
                self._logger.warn(f'Could not parse JSON: {e!s}')

        self._logger.info(f'Loaded {len(emojis):n} emoji definitions from {dirpath}')
        return emojis
