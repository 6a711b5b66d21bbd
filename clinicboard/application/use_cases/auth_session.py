from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import asdict, replace

from clinicboard.application.exceptions import AuthenticationError
from clinicboard.application.ports.session_storage import SessionStoragePort
from clinicboard.application.utils.access import has_role, is_admin, is_practitioner, is_staff, is_token_expired
from clinicboard.domain.entities.user import AuthSession, User

USER_KEY = "auth_user"
TOKEN_KEY = "auth_token"


class SessionManager:
    """
    Holds the signed-in user for the dashboard.

    Lifecycle: init() on startup reads the persisted session, login()/logout()
    change it, teardown() wipes the persisted storage on sign-out.

    One instance serves the whole process (see wiring), so a login signs in
    every caller of the service until logout. That matches the single-user
    demo login; per-client sessions need a real auth backend.
    """

    def __init__(
        self,
        storage: SessionStoragePort,
        demo_email: str,
        demo_password: str,
    ) -> None:
        self._storage = storage
        self._demo_email = demo_email
        self._demo_password = demo_password
        self._session: AuthSession | None = None
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def current(self) -> AuthSession | None:
        return self._session

    @property
    def current_user(self) -> User | None:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def has_role(self, *roles: str) -> bool:
        return has_role(self.current_user, *roles)

    @property
    def is_admin(self) -> bool:
        return is_admin(self.current_user)

    @property
    def is_practitioner(self) -> bool:
        return is_practitioner(self.current_user)

    @property
    def is_staff(self) -> bool:
        return is_staff(self.current_user)

    def init(self) -> AuthSession | None:
        with self._lock:
            stored_user = self._storage.get(USER_KEY)
            stored_token = self._storage.get(TOKEN_KEY)
            if not (stored_user and stored_token):
                self._session = None
                return None

            if is_token_expired(stored_token):
                self._logger.info("Stored session expired, clearing it", extra={"reason": "token expired"})
                self._storage.remove(USER_KEY)
                self._storage.remove(TOKEN_KEY)
                self._session = None
                return None

            try:
                user = User(**json.loads(stored_user))
            except (json.JSONDecodeError, TypeError) as e:
                self._logger.error("Error restoring session, clearing it", extra={"error": str(e)})
                self._storage.remove(USER_KEY)
                self._storage.remove(TOKEN_KEY)
                self._session = None
                return None

            self._session = AuthSession(user=user, token=stored_token)
            return self._session

    def login(self, email: str, password: str) -> AuthSession:
        # Only the configured demo account is accepted until a real auth API exists
        if email != self._demo_email or password != self._demo_password:
            self._logger.info("Login rejected", extra={"reason": "invalid credentials"})
            raise AuthenticationError("Invalid credentials")

        user = User(
            id="demo-user-id",
            email=email,
            first_name="Demo",
            last_name="User",
            role="admin",
            is_active=True,
        )
        session = AuthSession(user=user, token=f"demo-jwt-token-{int(time.time() * 1000)}")
        with self._lock:
            self._persist(session)
            self._session = session
        self._logger.info("User logged in")
        return session

    def logout(self) -> None:
        with self._lock:
            self._storage.remove(USER_KEY)
            self._storage.remove(TOKEN_KEY)
            self._session = None

    def teardown(self) -> None:
        with self._lock:
            self._storage.clear()
            self._session = None

    def update_user(self, **fields: object) -> User | None:
        with self._lock:
            if self._session is None:
                return None
            user = replace(self._session.user, **fields)
            self._session = AuthSession(user=user, token=self._session.token)
            self._persist(self._session)
            return user

    def auth_headers(self) -> dict[str, str]:
        session = self._session
        if session is None:
            return {}
        return {"Authorization": f"Bearer {session.token}"}

    def _persist(self, session: AuthSession) -> None:
        self._storage.set(USER_KEY, json.dumps(asdict(session.user)))
        self._storage.set(TOKEN_KEY, session.token)
