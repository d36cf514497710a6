"""
Local identity stub.

Issues sessions and profiles without verifying anything. Passwords are
accepted and ignored; there are no tokens. Do not treat this as a security
boundary. It exists so a real identity provider can be swapped in behind
the same interface without touching the asset store.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional

from asset_desk.activity import ActivityLogger
from asset_desk.assets.validation import ValidationError
from asset_desk.models import ActionType, Profile, Session, User
from asset_desk.state import AppState
from asset_desk.storage import StorageSlots


logger = logging.getLogger(__name__)

DEFAULT_STRUCTURE_NAME = "Main Structure"
EDITABLE_PROFILE_FIELDS = ("name", "avatar_url", "structure_name")

# Namespace for deriving stable account ids from e-mail addresses
ACCOUNT_NAMESPACE = uuid.UUID("6f1c9a52-3d0e-4b8a-9a57-2f4e8c1d7b90")


class IdentityProvider(ABC):
    """Interface the application uses to obtain and manage a session."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Session:
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Session:
        pass

    @abstractmethod
    def sign_out(self) -> None:
        pass

    @abstractmethod
    def current_session(self) -> Optional[Session]:
        pass

    @abstractmethod
    def update_profile(self, **changes: Any) -> Profile:
        pass


def normalize_email(email: str) -> str:
    """
    Lower-case and strip an e-mail address.

    Raises:
        ValidationError: If the address is blank or has no "@"
    """
    normalized = (email or "").strip().lower()
    if not normalized:
        raise ValidationError({"email": "E-mail is required"})
    local, _, domain = normalized.partition("@")
    if not local or not domain:
        raise ValidationError({"email": f"Invalid e-mail address: {email!r}"})
    return normalized


def account_id_for(email: str) -> str:
    """Stable account id for an e-mail address."""
    return str(uuid.uuid5(ACCOUNT_NAMESPACE, normalize_email(email)))


class LocalIdentityProvider(IdentityProvider):
    """
    Identity stub backed by the auth_user and user_profile slots.

    On construction a previously stored user and profile are restored into
    the application state, so a session survives restarts.
    """

    def __init__(
        self,
        state: AppState,
        slots: StorageSlots,
        activity_log: Optional[ActivityLogger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.state = state
        self.slots = slots
        self.activity_log = activity_log
        self.clock = clock
        self._restore()

    def _restore(self) -> None:
        user = self.slots.get_user()
        if user is None:
            return
        profile = self.slots.get_profile()
        if profile is None or profile.id != user.id:
            profile = self._new_profile(user)
        self.state.session = Session(user=user, profile=profile)
        logger.debug("Restored session for %s", user.email)

    def _new_profile(self, user: User) -> Profile:
        now = self.clock()
        return Profile(
            id=user.id,
            email=user.email,
            name=user.email.split("@")[0],
            avatar_url=None,
            structure_name=DEFAULT_STRUCTURE_NAME,
            created_at=now,
            updated_at=now,
        )

    def _start_session(self, email: str, action_type: ActionType) -> Session:
        normalized = normalize_email(email)
        user = User(
            id=account_id_for(normalized),
            email=normalized,
            created_at=self.clock(),
        )

        # Keep the stored profile when the same account signs in again
        stored = self.slots.get_profile()
        profile = stored if stored is not None and stored.id == user.id else self._new_profile(user)

        self.slots.set_user(user)
        self.slots.set_profile(profile)

        session = Session(user=user, profile=profile)
        self.state.session = session
        self.state.link_sent = False
        logger.info("%s: %s", action_type.value, normalized)

        if self.activity_log:
            self.activity_log.log_session_started(session, action_type)

        return session

    def sign_in(self, email: str, password: str) -> Session:
        """
        Sign in with an e-mail address. The password is not checked.

        Raises:
            ValidationError: If the e-mail address is invalid
            PersistenceError: If the session cannot be stored
        """
        return self._start_session(email, ActionType.SIGNED_IN)

    def sign_up(self, email: str, password: str) -> Session:
        """Create an account; behaves like sign_in."""
        return self._start_session(email, ActionType.SIGNED_UP)

    def sign_in_with_magic_link(self, email: str) -> None:
        """
        Pretend to send a sign-in link.

        Only records that a link was sent; no message leaves the machine.
        """
        normalized = normalize_email(email)
        self.state.link_sent = True
        logger.info("Magic link requested for %s", normalized)
        if self.activity_log:
            self.activity_log.log_magic_link_requested(normalized)

    def sign_out(self) -> None:
        """
        End the session and remove the account's locally cached data.

        Other accounts' assets stored on this device are kept. Storage is
        cleared before the session is, so a failed write leaves the user
        signed in.

        Raises:
            PersistenceError: If the stored data cannot be removed
        """
        session = self.state.session

        if session is None:
            self.slots.remove_user()
            self.slots.remove_profile()
            self.state.link_sent = False
            return

        account_id = session.account_id
        removed = len(self.slots.get_owner_assets(account_id))
        self.slots.set_owner_assets(account_id, [])
        self.slots.remove_user()
        self.slots.remove_profile()

        self.state.session = None
        self.state.link_sent = False
        logger.info("Signed out %s", session.user.email)

        if self.activity_log:
            self.activity_log.log_signed_out(account_id, removed)

    def current_session(self) -> Optional[Session]:
        return self.state.session

    def update_profile(self, **changes: Any) -> Profile:
        """
        Update editable profile fields.

        Args:
            **changes: Any of name, avatar_url, structure_name

        Returns:
            The updated profile

        Raises:
            NotAuthenticatedError: If nobody is signed in
            ValidationError: For unknown fields or a blank structure name
        """
        session = self.state.require_session()

        unknown = sorted(set(changes) - set(EDITABLE_PROFILE_FIELDS))
        if unknown:
            raise ValidationError({f: "Field cannot be edited" for f in unknown})

        if "structure_name" in changes:
            structure_name = str(changes["structure_name"] or "").strip()
            if not structure_name:
                raise ValidationError({"structure_name": "Structure name cannot be empty"})
            changes["structure_name"] = structure_name

        profile = replace(session.profile, **changes, updated_at=self.clock())
        self.slots.set_profile(profile)
        session.profile = profile

        if self.activity_log:
            self.activity_log.log_profile_updated(profile, sorted(changes))

        return replace(profile)
