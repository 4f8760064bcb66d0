# billing_admin/core/security.py
import secrets
from typing import Optional

from fastapi import Header, HTTPException, status

from billing_admin.core.config import settings


async def get_api_key(x_api_key: Optional[str] = Header(None)) -> None:
    """
    Shared-key guard for the admin API.

    Sessions and sign-in live in the external identity provider; when
    ADMIN_API_KEY is unset every request is let through.
    """
    expected = settings.ADMIN_API_KEY
    if not expected:
        return
    if not x_api_key or not secrets.compare_digest(x_api_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
