"""
Security Utilities.

The wall has a single shared password. A request either proves it knows the
password or it does not; there are no users or roles. The outcome of that
check is carried through the service layer as a WallAccess capability
instead of passing the raw password around.
"""

import hmac
from dataclasses import dataclass

from wallboard.backend.core.config import get_settings
from wallboard.backend.core.exceptions import AuthenticationError
from wallboard.backend.core.logging import get_logger

logger = get_logger(__name__)


def check_wall_password(supplied: str | None) -> bool:
    """
    Compare a supplied password against the configured wall password.

    Uses a constant-time comparison. Missing or empty input never matches.
    """
    if not supplied:
        return False
    expected = get_settings().wall_password
    if not expected:
        logger.warning("Wall password is not configured; rejecting credential")
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


@dataclass(frozen=True)
class WallAccess:
    """
    Capability proving (or not) that the caller holds the wall password.

    Services receive this object explicitly; anything that mutates owner
    content calls require() before touching the store.
    """

    authorized: bool = False

    def require(self) -> None:
        """Raise AuthenticationError unless the caller is authorized."""
        if not self.authorized:
            raise AuthenticationError("Invalid password")

    @classmethod
    def from_password(cls, supplied: str | None) -> "WallAccess":
        return cls(authorized=check_wall_password(supplied))


ANONYMOUS = WallAccess(authorized=False)
OWNER = WallAccess(authorized=True)
