"""
Local session handling.

This is a convenience gate, not security: accounts live in the same local
key/value store as the session and nothing is verified server-side.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List, Optional

from loguru import logger

from .exceptions import AuthError
from .models import User
from .storage import KeyValueStore


GUEST_EMAIL = "guest@deepfolio.ai"

USERS_KEY = "users"
SESSION_KEY = "loggedInUser"
GUEST_KEY = "isGuest"

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."
USER_EXISTS_MESSAGE = "User with this email already exists."
LOGIN_REQUIRED_MESSAGE = "Please log in first."
UNREADABLE_ACCOUNTS_MESSAGE = "Stored account data is unreadable."


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _norm_email(email: str) -> str:
    return (email or "").strip()


class AuthService:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self.user: Optional[User] = None

    def _accounts(self) -> List[Dict[str, Any]]:
        raw = self.store.get(USERS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise AuthError(UNREADABLE_ACCOUNTS_MESSAGE) from e
        if not isinstance(data, list):
            return []
        return [a for a in data if isinstance(a, dict)]

    def _start_session(self, user: User) -> User:
        self.store.set(SESSION_KEY, user.email)
        if user.is_guest:
            self.store.set(GUEST_KEY, "true")
        else:
            self.store.delete(GUEST_KEY)
        self.user = user
        return user

    def restore(self) -> Optional[User]:
        email = self.store.get(SESSION_KEY)
        if not email:
            self.user = None
            return None
        self.user = User(email=email, is_guest=self.store.get(GUEST_KEY) == "true")
        return self.user

    def login(self, email: str, password: str) -> User:
        email = _norm_email(email)
        digest = _hash_password(password)
        found = any(a.get("email") == email and a.get("password_hash") == digest for a in self._accounts())
        if not found:
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)
        logger.info(f"logged in as {email}")
        return self._start_session(User(email=email, is_guest=False))

    def signup(self, email: str, password: str) -> User:
        email = _norm_email(email)
        accounts = self._accounts()
        if any(a.get("email") == email for a in accounts):
            raise AuthError(USER_EXISTS_MESSAGE)

        accounts.append({"email": email, "password_hash": _hash_password(password)})
        self.store.set(USERS_KEY, json.dumps(accounts, ensure_ascii=False))
        logger.info(f"registered {email}")
        return self._start_session(User(email=email, is_guest=False))

    def login_as_guest(self) -> User:
        return self._start_session(User(email=GUEST_EMAIL, is_guest=True))

    def logout(self) -> None:
        self.store.delete(SESSION_KEY)
        self.store.delete(GUEST_KEY)
        self.user = None

    def require_user(self) -> User:
        user = self.user or self.restore()
        if user is None:
            raise AuthError(LOGIN_REQUIRED_MESSAGE)
        return user
