import json
import sys
from typing import Any, Dict, List

import pytest
import requests

from slackmoji.core.emoji import Emoji
from slackmoji.core.logger import Logger


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b'', url: str = 'https://example.com'):
        self.status_code = status_code
        self.content = content
        self.url = url

    @staticmethod
    def from_json(data: Any, status_code: int = 200) -> 'FakeResponse':
        return FakeResponse(status_code, json.dumps(data).encode('utf-8'))

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.content)

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f'{self.status_code} Error for url: {self.url}', response=self)


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, *responses):
        self.responses: List = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def _next(self, method: str, url: str, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url, **kwargs):
        return self._next('POST', url, **kwargs)

    def get(self, url, **kwargs):
        return self._next('GET', url, **kwargs)


def make_emoji_dict(name: str, created: int = 1600000000, **kwargs) -> Dict[str, Any]:
    data = {
        'name': name,
        'is_alias': 0,
        'alias_for': '',
        'url': f'https://emoji.slack-edge.com/T000/{name}/abcdef.png',
        'created': created,
        'user_display_name': 'someone',
        'avatar_hash': 'g0123456789a',
    }
    data.update(kwargs)
    return data


def make_emoji(name: str, created: int = 1600000000, **kwargs) -> Emoji:
    return Emoji.from_dict(make_emoji_dict(name, created, **kwargs))


class _CurrentStderr:
    """Forwards to whatever sys.stderr is at call time (capsys swaps it between setup and call)."""

    def __getattr__(self, name):
        return getattr(sys.stderr, name)


@pytest.fixture(autouse=True)
def logger(capsys):
    instance = Logger.get_instance(require_new=True, verbose=True, console=_CurrentStderr())
    yield instance
    instance.close_io()
