"""
Explicit application state.

One AppState is created per running application and handed to the identity
provider and the asset store. It holds the active session; nothing about
the session lives at module level.
"""

from dataclasses import dataclass
from typing import Optional

from asset_desk.models import Session


class NotAuthenticatedError(Exception):
    """Raised when an operation needs a signed-in account and there is none."""

    def __init__(self, message: str = "You must be signed in to do this"):
        super().__init__(message)


@dataclass
class AppState:
    """Mutable state shared by the identity provider and the asset store."""
    session: Optional[Session] = None
    link_sent: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def account_id(self) -> Optional[str]:
        return self.session.account_id if self.session else None

    def require_session(self) -> Session:
        """
        Return the active session.

        Raises:
            NotAuthenticatedError: If nobody is signed in
        """
        if self.session is None:
            raise NotAuthenticatedError()
        return self.session
