"""
Admin identity helpers.

Identity comes from the auth proxy headers; admin rights come from the
ADMIN_EMAILS allow-list. No sessions or cookies are handled here.
"""
from typing import Iterable, Optional

DEV_ADMIN_EMAIL = "dev@localhost"


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    normalized = email.strip().lower()
    return normalized or None


def resolve_email_from_headers(
    x_auth_request_email: Optional[str],
    x_forwarded_email: Optional[str],
) -> Optional[str]:
    return _normalize_email(x_auth_request_email or x_forwarded_email)


def is_admin_email(email: Optional[str], admin_emails: Iterable[str]) -> bool:
    if not email:
        return False
    return _normalize_email(email) in {e.lower() for e in admin_emails}
