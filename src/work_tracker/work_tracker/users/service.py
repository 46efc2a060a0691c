from __future__ import annotations

import itertools
import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.constants import TOKEN_KEY, USER_KEY
from ..core.exceptions import AuthenticationError, ValidationError
from ..storage.kv import KeyValueStore
from .identity import IdentityProvider
from .model import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: User
    token: str


class SessionService:
    """Use case: login/logout and "who is logged in".

    The session (token + user) is kept in ``store``; in the web app that is
    the browser-held Flask session cookie.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: KeyValueStore,
        *,
        login_delay_seconds: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self._identity = identity
        self._store = store
        self._login_delay = max(0.0, float(login_delay_seconds))
        self._sleep = sleep
        self._clock = clock
        self._sequence = itertools.count(1)

    def login(self, email: str, password: str) -> LoginResult:
        # Simulated network latency.
        if self._login_delay:
            self._sleep(self._login_delay)

        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be text")
        email = email.strip()

        user = self._identity.verify(email, password)
        if not user:
            logger.warning("Login failed for %s", email)
            raise AuthenticationError("Invalid email or password")

        token = self._issue_token(user)
        self._store.set(TOKEN_KEY, token)
        self._store.set(USER_KEY, json.dumps(user.to_dict()))

        logger.info("User %s (%s) logged in", user.user_id, user.role.value)
        return LoginResult(user=user, token=token)

    def logout(self) -> None:
        user = self.get_current_user()
        self._store.remove(TOKEN_KEY)
        self._store.remove(USER_KEY)
        if user:
            logger.info("User %s logged out", user.user_id)

    def get_current_user(self) -> Optional[User]:
        raw = self._store.get(USER_KEY)
        if not raw:
            return None
        return User.from_dict(json.loads(raw))

    def is_authenticated(self) -> bool:
        return bool(self._store.get(TOKEN_KEY))

    def _issue_token(self, user: User) -> str:
        millis = int(self._clock() * 1000)
        return f"session_token_{user.user_id}_{millis}_{next(self._sequence)}"
