"""Mapping of identity provider claims to identity assertions."""

from typing import Any

from wildlanka.domain.value import IdentityAssertion

PROFILE_CLAIMS = (
    "email",
    "name",
    "picture",
    "nickname",
    "given_name",
    "family_name",
    "locale",
)


def _role_hint(claims: dict[str, Any], role_claim: str) -> str | None:
    """Role hint from the namespaced claim or ``app_metadata.role``."""
    hint = claims.get(role_claim)
    if hint is None:
        app_metadata = claims.get("app_metadata")
        if isinstance(app_metadata, dict):
            hint = app_metadata.get("role")
    return hint if isinstance(hint, str) else None


def assertion_from_claims(claims: dict[str, Any], role_claim: str) -> IdentityAssertion:
    """Build an identity assertion from provider claims.

    Claims that are absent or not strings are left unset.

    Args:
        claims: Userinfo response or decoded ID token
        role_claim: Name of the namespaced role claim

    Returns:
        Identity assertion for the login
    """
    profile = {
        key: claims[key] for key in PROFILE_CLAIMS if isinstance(claims.get(key), str)
    }
    email_verified = claims.get("email_verified")

    return IdentityAssertion(
        subject_id=claims.get("sub") if isinstance(claims.get("sub"), str) else None,
        email_verified=email_verified if isinstance(email_verified, bool) else None,
        role_hint=_role_hint(claims, role_claim),
        **profile,
    )
