from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from .errors import AuthError, TransportError
from .models import Credentials, MatchHistoryResponse, parse_match_history


logger = logging.getLogger(__name__)

# Season 3, ranked, region 3; the 5 most recent matches.
MATCH_HISTORY_URL = (
    "https://api.krunker.io/match-history/me/season/3/gameMode/undefined"
    "/isRanked/true/region/3?limit=5&offset=0"
)

# The API only answers requests that look like they come from the game client.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/88.0.4324.0 Electron/12.0.0-nightly.20201116 Safari/537.36"
)
ORIGIN = "https://krunker.io"
REFERER = "https://krunker.io/?game=FRA:929il"


def normalize_token(token: str) -> str:
    if not token:
        raise ValueError("bearer token must be a non-empty string")
    cleaned = token.replace('"', "")
    if not cleaned:
        raise ValueError("bearer token must be a non-empty string")
    return cleaned


class MatchHistoryClient:
    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        kwargs = {}
        if timeout_s is not None:
            kwargs["timeout"] = timeout_s
        self.client = httpx.Client(
            headers={"User-Agent": user_agent, "Origin": ORIGIN, "Referer": REFERER},
            transport=transport,
            **kwargs,
        )

    def __enter__(self) -> "MatchHistoryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _headers(self, credentials: Credentials) -> Dict[str, str]:
        return {"Authorization": f"Bearer {normalize_token(credentials.token)}"}

    def fetch(self, credentials: Credentials, *, endpoint: str = MATCH_HISTORY_URL) -> MatchHistoryResponse:
        headers = self._headers(credentials)
        logger.debug("GET %s", endpoint)
        try:
            resp = self.client.get(endpoint, headers=headers)
        except httpx.RequestError as e:
            raise TransportError(f"Match history request failed: {e}") from e

        if not resp.is_success:
            logger.warning("Match history request rejected with HTTP %s", resp.status_code)
            raise AuthError(resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise TransportError(f"Match history response is not valid JSON: {e}") from e

        history = parse_match_history(payload)
        logger.debug("Fetched %d matches (%d pages)", len(history.matches), history.total_pages)
        return history
