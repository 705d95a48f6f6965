# -----------------------------------------------------------------------------
# custom emoji metadata fetching (emoji.adminList)
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List

import requests
from requests import Response, Session

from slackmoji import __version__
from slackmoji.core.emoji import Emoji, PageResponse, sort_by_creation
from slackmoji.core.errors import ApiError, ParseError, TransportError
from slackmoji.core.logger import Logger


def create_session() -> Session:
    session = requests.Session()
    session.headers['User-Agent'] = f'slackmoji/{__version__}'
    return session


class EmojiFetcher:
    API_URL_TEMPLATE = 'https://{workspace}.slack.com/api/emoji.adminList'
    TIMEOUT_SEC = 10

    def __init__(self, session: Session|None = None, logger: Logger|None = None):
        self._session: Session = session or create_session()
        self._logger: Logger = logger or Logger.get_instance()

    def fetch(self, workspace: str, token: str) -> List[Emoji]:
        url = self.API_URL_TEMPLATE.format(workspace=workspace)

        self._logger.info(f'Getting emoji count: {url}')
        total_count = self._fetch_page(url, token, 1).total_count

        self._logger.info(f'Getting emoji data: {url}')
        page = self._fetch_page(url, token, total_count)

        if len(page.emoji) != page.total_count:
            self._logger.warn(f'Expected {page.total_count:n} emoji, received {len(page.emoji):n}')
        self._logger.info(f'Loaded {len(page.emoji):n} emoji definitions')
        return sort_by_creation(page.emoji)

    def _fetch_page(self, url: str, token: str, count: int) -> PageResponse:
        data = self._post(url, {
            'page': '1',
            'count': str(count),
            'token': token,
        })
        try:
            ok, payload = PageResponse.extract_ok(data)
            if not ok:
                raise ApiError(payload)
            return PageResponse.from_dict(data)
        except ParseError as e:
            raise TransportError(url, f'Malformed response: {e!s}') from e

    def _post(self, url: str, fields: Dict[str, str]) -> Any:
        # (None, value) tuples make requests send plain multipart/form-data fields
        multipart = {k: (None, v) for k, v in fields.items()}
        try:
            response: Response = self._session.post(url, files=multipart, timeout=self.TIMEOUT_SEC)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise TransportError(url, e) from e
