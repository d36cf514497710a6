"""
Identity module for the Digital Asset Desk.

Provides the identity provider interface and its local stub.
"""

from asset_desk.identity.session import (
    DEFAULT_STRUCTURE_NAME,
    IdentityProvider,
    LocalIdentityProvider,
    account_id_for,
)

__all__ = [
    "DEFAULT_STRUCTURE_NAME",
    "IdentityProvider",
    "LocalIdentityProvider",
    "account_id_for",
]
