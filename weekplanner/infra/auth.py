"""
Account/identity provider.

Architecture Decision: Observer Pattern
The planner only needs the signed-in user's id (the remote state partition
key) and a way to hear about sign-in/sign-out. Providers notify subscribed
callbacks whenever the session changes.

Errors are returned as AuthResult(ok=False, error=...), never raised.
"""

import hashlib
import hmac
import logging
import secrets
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError

from weekplanner.domain.models import new_id
from weekplanner.infra.db import AccountModel
from weekplanner.infra.repository import AccountRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
PBKDF2_ITERATIONS = 200_000


class AuthResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    error: Optional[str] = None


class IdentityProvider:
    """
    Abstract identity provider.

    Subclasses implement the account operations; subscription handling is
    shared.
    """

    def __init__(self):
        self._listeners: List[Callable[[Optional[str]], None]] = []

    def get_current_user_email(self) -> Optional[str]:
        raise NotImplementedError("Subclasses must implement get_current_user_email")

    def get_current_user_id(self) -> Optional[str]:
        raise NotImplementedError("Subclasses must implement get_current_user_id")

    async def sign_in(self, email: str, password: str) -> AuthResult:
        raise NotImplementedError("Subclasses must implement sign_in")

    async def sign_up(self, email: str, password: str) -> AuthResult:
        raise NotImplementedError("Subclasses must implement sign_up")

    async def sign_out(self) -> None:
        raise NotImplementedError("Subclasses must implement sign_out")

    def subscribe(self, callback: Callable[[Optional[str]], None]) -> Callable[[], None]:
        """
        Register a session-change callback (receives the current email).

        Returns:
            A function that removes the callback again.
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        email = self.get_current_user_email()
        for callback in list(self._listeners):
            callback(email)


def hash_password(password: str, salt: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"),
                                 bytes.fromhex(salt), iterations)
    return digest.hex()


class LocalIdentityProvider(IdentityProvider):
    """
    Identity provider backed by the accounts table of the planner database.

    Sessions live in memory only.
    """

    def __init__(self, account_repo: Optional[AccountRepository] = None,
                 iterations: int = PBKDF2_ITERATIONS):
        super().__init__()
        self.account_repo = account_repo or AccountRepository()
        self.iterations = iterations
        self._user_id: Optional[str] = None
        self._email: Optional[str] = None

    def get_current_user_email(self) -> Optional[str]:
        return self._email

    def get_current_user_id(self) -> Optional[str]:
        return self._user_id

    async def sign_up(self, email: str, password: str) -> AuthResult:
        """Create an account and sign it in"""
        email = (email or "").strip().lower()
        if "@" not in email:
            return AuthResult(ok=False, error="Invalid email")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return AuthResult(ok=False, error=f"Password must have at least {MIN_PASSWORD_LENGTH} characters")

        try:
            if await self.account_repo.get_by_email(email):
                return AuthResult(ok=False, error="Account already exists")

            salt = secrets.token_hex(16)
            account = await self.account_repo.create(AccountModel(
                id=new_id(),
                email=email,
                password_hash=hash_password(password, salt, self.iterations),
                salt=salt,
                iterations=self.iterations,
            ))
        except IntegrityError:
            return AuthResult(ok=False, error="Account already exists")
        except Exception as e:
            logger.warning(f"Sign up failed for {email}: {e}")
            return AuthResult(ok=False, error="Account service unavailable")

        logger.info(f"Account created: {email}")
        self._start_session(account)
        return AuthResult(ok=True)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        email = (email or "").strip().lower()
        try:
            account = await self.account_repo.get_by_email(email)
        except Exception as e:
            logger.warning(f"Sign in failed for {email}: {e}")
            return AuthResult(ok=False, error="Account service unavailable")

        if account is None:
            return AuthResult(ok=False, error="Invalid email or password")

        candidate = hash_password(password or "", account.salt, account.iterations)
        if not hmac.compare_digest(candidate, account.password_hash):
            return AuthResult(ok=False, error="Invalid email or password")

        self._start_session(account)
        return AuthResult(ok=True)

    async def sign_out(self) -> None:
        if self._user_id is None:
            return
        logger.info(f"Signed out: {self._email}")
        self._user_id = None
        self._email = None
        self._notify()

    def _start_session(self, account: AccountModel) -> None:
        self._user_id = account.id
        self._email = account.email
        self._notify()
