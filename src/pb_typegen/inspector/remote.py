from __future__ import annotations

import logging
from typing import Any

import requests

from pb_typegen.inspector.errors import SchemaSourceError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
PAGE_SIZE = 200


class PocketBaseClient:
    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()

    def authenticate(self, email: str, password: str) -> str:
        payload = self._request(
            "post",
            "/api/admins/auth-with-password",
            data={"identity": email, "password": password},
        )
        token = payload.get("token")
        if not token:
            raise SchemaSourceError("Authentication response did not include a token")
        return token

    def list_collections(self, token: str) -> list[dict[str, Any]]:
        payload = self._request(
            "get",
            "/api/collections",
            params={"perPage": PAGE_SIZE},
            headers={"Authorization": token},
        )
        return payload.get("items", [])

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._session.request(
                method, f"{self._url}{path}", timeout=self._timeout, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise SchemaSourceError(f"{method.upper()} {path} failed: {exc}") from exc


def from_url(url: str, email: str = "", password: str = "") -> list[dict[str, Any]]:
    client = PocketBaseClient(url)
    token = client.authenticate(email, password)
    collections = client.list_collections(token)
    logger.info("loaded %d collections from %s", len(collections), url)
    return collections
