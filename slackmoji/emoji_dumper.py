#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# slack workspace custom emoji listing and batch download
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
# 1. List: ./emoji_dumper.py list --workspace <ws> [--output <dir/|file|->]
#    Token is read from --token or SLACK_TOKEN (.env in cwd is loaded too)
# 2. Download: ./emoji_dumper.py download <dir>
#    Reads <name>.json files saved by "list" and puts images next to them
# -----------------------------------------------------------------------------
from __future__ import annotations

import locale
import os
import re
from argparse import ArgumentParser, ArgumentTypeError, Namespace
from typing import List

from dotenv import load_dotenv

from slackmoji import __version__
from slackmoji.core.downloader import Downloader, build_download_pairs
from slackmoji.core.emoji import Emoji, serialize
from slackmoji.core.errors import SerializationError, SinkWriteError, SlackmojiError
from slackmoji.core.exception_handler import ExceptionHandler
from slackmoji.core.fetcher import EmojiFetcher
from slackmoji.core.logger import Logger
from slackmoji.core.reader import EmojiDirectoryReader
from slackmoji.core.sink import OutputSink, create_sink


class MissingTokenError(SlackmojiError):
    def __init__(self):
        super().__init__('Missing token: use --token or set SLACK_TOKEN in environment variables')


def workspace_name(value: str) -> str:
    if not re.fullmatch(r'[A-Za-z0-9][A-Za-z0-9-]*', value):
        raise ArgumentTypeError(f'invalid workspace name: {value!r}')
    return value


# noinspection PyMethodMayBeStatic
class EmojiDumper:
    def __init__(self):
        env_file = os.path.join(os.getcwd(), '.env')
        if os.path.isfile(env_file):
            load_dotenv(env_file)
        self.logger: Logger = Logger.get_instance()
        try:
            locale.setlocale(locale.LC_ALL, '')
        except locale.Error as e:
            self.logger.debug(f'Falling back to default locale: {e!s}')
        self.args: Namespace

    def run(self, argv: List[str]|None = None):
        self.args = self._parse_args(argv)
        self.logger = Logger.get_instance(
            require_new=True,
            filename=self.args.log_file,
            verbose=self.args.verbose,
        )
        _handler = ExceptionHandler(self.logger)
        try:
            self.args.invoke(self.args)
        except Exception as e:
            _handler.handle(e)
        finally:
            self.logger.close_io()

    def _parse_args(self, argv: List[str]|None) -> Namespace:
        parser = ArgumentParser(
            prog='slackmoji',
            description='Process Slack custom emoji',
        )
        parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
        parser.add_argument('-v', '--verbose', action='store_true', help='be verbose')
        parser.add_argument('--log-file', metavar='<file>', default=os.environ.get('SLACKMOJI_LOG_FILE'),
                            help='append log records to this file (default: $SLACKMOJI_LOG_FILE)')
        subparsers = parser.add_subparsers(dest='command', metavar='<command>', required=True)

        list_parser = subparsers.add_parser('list', help='list all custom emoji in a workspace')
        list_parser.add_argument('--workspace', metavar='<name>', required=True, type=workspace_name,
                                 help='workspace subdomain, as in https://<name>.slack.com')
        list_parser.add_argument('--token', metavar='<token>', default=os.environ.get('SLACK_TOKEN'),
                                 help='authorization token (default: $SLACK_TOKEN)')
        list_parser.add_argument('--output', metavar='<path>',
                                 help="directory or file to write JSON to, '-' for stdout "
                                      "(default: directory named after the workspace)")
        list_parser.set_defaults(invoke=self._invoke_list)

        download_parser = subparsers.add_parser('download', help='download images of previously listed emoji')
        download_parser.add_argument('-f', '--force', action='store_true',
                                     help='download already downloaded emoji again')
        download_parser.add_argument('path', metavar='<dir>', help='directory with saved emoji definitions')
        download_parser.set_defaults(invoke=self._invoke_download)

        return parser.parse_args(argv)

    def _invoke_list(self, args: Namespace):
        if not args.token:
            raise MissingTokenError()
        output = args.output or (args.workspace + os.sep)

        with create_sink(output) as sink:
            emojis = EmojiFetcher(logger=self.logger).fetch(args.workspace, args.token)
            failed = self.emit(emojis, sink)

        self.logger.info(f'Done! {len(emojis):n} emoji in total, {failed:n} not written')

    def emit(self, emojis: List[Emoji], sink: OutputSink) -> int:
        failed = 0
        for emoji in emojis:
            self.logger.debug(f'{emoji.name} -> {emoji.url}')
            try:
                sink.write(emoji.name, serialize(emoji))
            except (SerializationError, SinkWriteError) as e:
                self.logger.error(str(e))
                failed += 1
        return failed

    def _invoke_download(self, args: Namespace):
        emojis = EmojiDirectoryReader(self.logger).read(args.path)
        pairs = build_download_pairs(emojis, args.path, self.logger)
        Downloader(logger=self.logger).download_all(pairs, force=args.force)


def main():
    EmojiDumper().run()


if __name__ == '__main__':
    main()
