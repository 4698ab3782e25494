"""Signed-in user session.

Sign-in, token issuance and profile storage belong to the external auth
backend. This object only carries what the assistant client needs, and is
passed explicitly to whoever makes requests on the user's behalf.
"""

import logging

from case_counsel.models.schemas import Profile

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for session and access failures."""


class SessionClosedError(SessionError):
    """Raised when a signed-out session is used."""


class SubscriptionRequiredError(SessionError):
    """Raised when the user's subscription is not active."""


class AccessBlockedError(SessionError):
    """Raised when an administrator has disabled the user's access."""


class UserSession:
    """Lifecycle of one signed-in user.

    Created on sign-in with ``open``, refreshed with ``rotate_token`` and
    ``update_profile``, destroyed with ``close``. A closed session rejects
    every further use.
    """

    def __init__(self, user_id: str, access_token: str, profile: Profile | None = None) -> None:
        self.user_id = user_id
        self._access_token = access_token
        self._profile = profile
        self._closed = False

    @classmethod
    def open(cls, user_id: str, access_token: str, profile: Profile | None = None) -> "UserSession":
        if not user_id:
            raise ValueError("user_id is required")
        if not access_token:
            raise ValueError("access_token is required")
        logger.info(f"Session opened for user {user_id}")
        return cls(user_id, access_token, profile)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def access_token(self) -> str:
        self._ensure_open()
        return self._access_token

    @property
    def profile(self) -> Profile | None:
        return self._profile

    def rotate_token(self, access_token: str) -> None:
        self._ensure_open()
        if not access_token:
            raise ValueError("access_token is required")
        self._access_token = access_token
        logger.debug(f"Access token rotated for user {self.user_id}")

    def update_profile(self, profile: Profile | None) -> None:
        self._ensure_open()
        self._profile = profile

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._access_token = ""
        self._profile = None
        logger.info(f"Session closed for user {self.user_id}")

    def check_access(self) -> None:
        """Verify the user may use the assistant.

        A session without a loaded profile is allowed through.

        Raises:
            SessionClosedError: If the session was closed.
            SubscriptionRequiredError: If the subscription is inactive.
            AccessBlockedError: If access has been disabled.
        """
        self._ensure_open()
        if self._profile is None:
            return
        if not self._profile.subscription_active:
            raise SubscriptionRequiredError("An active subscription is required")
        if not self._profile.access_enabled:
            raise AccessBlockedError("Access has been disabled by an administrator")

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError(f"Session for user {self.user_id} is closed")
