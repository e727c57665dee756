from __future__ import annotations

from abc import ABC, abstractmethod


class TokenProvider(ABC):
    @abstractmethod
    def current_token(self) -> str | None:
        """Return the current authentication token, or None if unauthenticated."""
        ...


class StaticTokenProvider(TokenProvider):
    def __init__(self, token: str | None) -> None:
        self._token = token

    def current_token(self) -> str | None:
        return self._token


class TokenStore(TokenProvider):
    """Holds the token obtained by the most recent login, until it is cleared."""

    _token: str | None

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def update(self, token: str | None) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None

    def current_token(self) -> str | None:
        return self._token
