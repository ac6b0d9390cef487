"""httpx client the collection UI uses to talk to the record store."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import ValidationError

from .models import Game

logger = logging.getLogger(__name__)


class NetworkError(RuntimeError):
    """Raised for transport failures and non-success responses from the store."""

    def __init__(
        self, operation: str, message: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code


class NotFoundError(NetworkError):
    """Raised when the store has no record for the requested id."""


class GamesClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 10.0,
        http: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._cache_token = 0

    def _next_cache_token(self) -> str:
        self._cache_token = max(time.time_ns(), self._cache_token + 1)
        return str(self._cache_token)

    def close(self) -> None:
        self._http.close()

    def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s failed: %s", operation, exc)
            raise NetworkError(operation, f"Could not reach the game store ({exc})") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.warning("%s: %s %s returned 404", operation, method, path)
            raise NotFoundError(operation, "Game not found", response.status_code)
        if response.is_error:
            logger.warning(
                "%s: %s %s returned %s", operation, method, path, response.status_code
            )
            raise NetworkError(
                operation,
                f"Game store responded with status {response.status_code}",
                response.status_code,
            )
        return response

    @staticmethod
    def _decode(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(operation, "Game store returned invalid JSON") from exc

    @staticmethod
    def _to_game(operation: str, payload: Any) -> Game:
        try:
            return Game.model_validate(payload)
        except ValidationError as exc:
            raise NetworkError(operation, "Game store returned a malformed record") from exc

    def list_games(self) -> list[Game]:
        """Fetch the whole collection, bypassing any HTTP caches."""
        response = self._request(
            "load games",
            "GET",
            "/games",
            params={"_": self._next_cache_token()},
            headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
        )
        payload = self._decode("load games", response)
        if not isinstance(payload, list):
            raise NetworkError("load games", "Game store returned an unexpected payload")
        games = [self._to_game("load games", item) for item in payload]
        logger.debug("Fetched %d games", len(games))
        return games

    def create_game(self, data: Dict[str, Any]) -> Game:
        response = self._request("add game", "POST", "/games", json=data)
        return self._to_game("add game", self._decode("add game", response))

    def update_game(self, game_id: Union[int, str], data: Dict[str, Any]) -> Game:
        response = self._request("update game", "PUT", f"/games/{game_id}", json=data)
        return self._to_game("update game", self._decode("update game", response))

    def delete_game(self, game_id: Union[int, str]) -> None:
        self._request("delete game", "DELETE", f"/games/{game_id}")
