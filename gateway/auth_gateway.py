"""Login/logout against ``/auth/login`` and session persistence."""

import logging
from typing import Optional

from cache.store import KeyValueStore
from config import STORAGE_KEYS
from contracts import LoginRequest, LoginResponse, Session
from gateway.http_client import ApiClient


logger = logging.getLogger(__name__)


class AuthGateway:
    """Issues the login call and keeps token, username and role in the store."""

    def __init__(self, client: ApiClient, store: KeyValueStore):
        self.client = client
        self.store = store

    def login(self, username: str, password: str) -> LoginResponse:
        """Authenticate and persist the session.

        Raises:
            ApiError: If the backend rejects the credentials or is unreachable.
        """
        request = LoginRequest(username=username, password=password)
        data = self.client.post("/auth/login", json=request.model_dump())
        response = LoginResponse.model_validate(data or {})
        self.store.set(STORAGE_KEYS["token"], response.token)
        self.store.set(STORAGE_KEYS["username"], response.username)
        self.store.set(STORAGE_KEYS["role"], response.role)
        logger.info("Logged in as %s (%s)", response.username, response.role)
        return response

    def logout(self) -> None:
        for key in ("token", "username", "role"):
            self.store.delete(STORAGE_KEYS[key])

    def token(self) -> Optional[str]:
        return self.store.get(STORAGE_KEYS["token"])

    def username(self) -> Optional[str]:
        return self.store.get(STORAGE_KEYS["username"])

    def role(self) -> Optional[str]:
        return self.store.get(STORAGE_KEYS["role"])

    def session(self) -> Session:
        return Session(token=self.token(), username=self.username(), role=self.role())

    def is_authenticated(self) -> bool:
        return self.session().is_authenticated()

    def is_admin(self) -> bool:
        return self.session().is_admin()
