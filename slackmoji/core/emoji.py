# -----------------------------------------------------------------------------
# emoji.adminList data model
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Tuple

from slackmoji.core.errors import ParseError, SerializationError

ExtraFields = Dict[str, Any]


def _take(data: Dict[str, Any], key: str, types: type|Tuple[type, ...], default: Any = None) -> Any:
    if key not in data:
        if default is None:
            raise ParseError(f'Missing field "{key}"')
        return default
    value = data[key]
    if not isinstance(value, types) or (isinstance(value, bool) and bool not in _as_tuple(types)):
        raise ParseError(f'Invalid type of field "{key}": {type(value).__name__}')
    return value


def _as_tuple(types: type|Tuple[type, ...]) -> Tuple[type, ...]:
    return types if isinstance(types, tuple) else (types,)


def _extra(data: Dict[str, Any], modeled: Tuple[str, ...]) -> ExtraFields:
    return {k: v for k, v in data.items() if k not in modeled}


class Emoji:
    FIELDS = ('name', 'is_alias', 'alias_for', 'url', 'created', 'user_display_name', 'avatar_hash')

    def __init__(self, name: str, url: str, created: int,
                 is_alias: int = 0, alias_for: str = '',
                 user_display_name: str = '', avatar_hash: str = '',
                 extra: ExtraFields|None = None):
        self._name = name
        self._is_alias = is_alias
        self._alias_for = alias_for
        self._url = url
        self._created = created
        self._user_display_name = user_display_name
        self._avatar_hash = avatar_hash
        self._extra: ExtraFields = dict(extra or {})

    @staticmethod
    def from_dict(data: Any) -> Emoji:
        if not isinstance(data, dict):
            raise ParseError(f'Emoji definition should be an object, got {type(data).__name__}')
        return Emoji(
            name=_take(data, 'name', str),
            is_alias=_take(data, 'is_alias', (int, bool)),
            alias_for=_take(data, 'alias_for', str, ''),
            url=_take(data, 'url', str),
            created=_take(data, 'created', int),
            user_display_name=_take(data, 'user_display_name', str, ''),
            avatar_hash=_take(data, 'avatar_hash', str, ''),
            extra=_extra(data, Emoji.FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'name': self._name,
            'is_alias': self._is_alias,
            'alias_for': self._alias_for,
            'url': self._url,
            'created': self._created,
            'user_display_name': self._user_display_name,
            'avatar_hash': self._avatar_hash,
        }
        for key, value in self._extra.items():
            result.setdefault(key, value)
        return result

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_alias(self) -> bool:
        return bool(self._is_alias)

    @property
    def alias_for(self) -> str:
        return self._alias_for

    @property
    def url(self) -> str:
        return self._url

    @property
    def created(self) -> int:
        return self._created

    @property
    def user_display_name(self) -> str:
        return self._user_display_name

    @property
    def avatar_hash(self) -> str:
        return self._avatar_hash

    @property
    def extra(self) -> ExtraFields:
        return dict(self._extra)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Emoji):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f'Emoji({self._name!r}, created={self._created!r}, is_alias={self._is_alias!r})'


class Paging:
    def __init__(self, count: int, extra: ExtraFields|None = None):
        self._count = count
        self._extra: ExtraFields = dict(extra or {})

    @staticmethod
    def from_dict(data: Any) -> Paging:
        if not isinstance(data, dict):
            raise ParseError('Field "paging" should be an object')
        return Paging(_take(data, 'count', int), _extra(data, ('count',)))

    @property
    def count(self) -> int:
        return self._count

    @property
    def extra(self) -> ExtraFields:
        return dict(self._extra)


class PageResponse:
    FIELDS = ('custom_emoji_total_count', 'paging', 'ok', 'emoji')

    def __init__(self, ok: bool, total_count: int, paging: Paging, emoji: List[Emoji], extra: ExtraFields|None = None):
        self._ok = ok
        self._total_count = total_count
        self._paging = paging
        self._emoji = emoji
        self._extra: ExtraFields = dict(extra or {})

    @staticmethod
    def extract_ok(data: Any) -> Tuple[bool, ExtraFields]:
        # failed responses carry none of the page fields, only the error payload
        if not isinstance(data, dict):
            raise ParseError(f'API response should be an object, got {type(data).__name__}')
        return _take(data, 'ok', bool), _extra(data, ('ok',))

    @staticmethod
    def from_dict(data: Any) -> PageResponse:
        ok, _ = PageResponse.extract_ok(data)
        emoji = _take(data, 'emoji', list)
        return PageResponse(
            ok=ok,
            total_count=_take(data, 'custom_emoji_total_count', int),
            paging=Paging.from_dict(_take(data, 'paging', dict)),
            emoji=[Emoji.from_dict(e) for e in emoji],
            extra=_extra(data, PageResponse.FIELDS),
        )

    @property
    def ok(self) -> bool:
        return self._ok

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def paging(self) -> Paging:
        return self._paging

    @property
    def emoji(self) -> List[Emoji]:
        return self._emoji

    @property
    def extra(self) -> ExtraFields:
        return dict(self._extra)


def is_safe_name(name: str) -> bool:
    """Whether ``name`` can be used as a file name stem inside one directory."""
    if name in ('', '.', '..'):
        return False
    return not any(sep and sep in name for sep in (os.sep, os.altsep, '/'))


def sort_by_creation(emojis: List[Emoji]) -> List[Emoji]:
    return sorted(emojis, key=lambda e: e.created)


def serialize(emoji: Emoji) -> str:
    try:
        return json.dumps(emoji.to_dict(), indent=4, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(emoji.name, e) from e
