# billing_admin/api/deps.py
from fastapi import Request

from billing_admin.core.errors import MalformedBody


async def read_json_object(request: Request) -> dict:
    """Request body as a JSON object, or MalformedBody (400)."""
    try:
        body = await request.json()
    except ValueError:
        raise MalformedBody("Malformed JSON body")
    if not isinstance(body, dict):
        raise MalformedBody()
    return body
