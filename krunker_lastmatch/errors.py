from __future__ import annotations


class LastMatchError(Exception):
    """Base class for errors surfaced by a resolution cycle."""


class ConfigError(LastMatchError):
    pass


class TransportError(LastMatchError):
    """Network failure or an undecodable / malformed response body."""


class AuthError(LastMatchError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"API Error: {status_code}. Check your Bearer Token.")


class PlayerNotFound(LastMatchError):
    def __init__(self, player_name: str, matches_scanned: int) -> None:
        self.player_name = player_name
        self.matches_scanned = matches_scanned
        super().__init__(f'Username "{player_name}" not found in your last {matches_scanned} matches.')


class InternalError(LastMatchError):
    """A match was selected for a player but the player's entry is missing from it."""
