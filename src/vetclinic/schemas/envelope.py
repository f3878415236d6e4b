from typing import Any

from pydantic import BaseModel


class Envelope(BaseModel):
    """
    Uniform response wrapper returned by every CRUD operation, success or not.

        {"success": true, "message": "...", "data": {...} | [...] | null}
    """

    success: bool
    message: str
    data: Any = None


def success(data: Any, message: str = "Operation completed successfully.") -> Envelope:
    return Envelope(success=True, message=message, data=data)


def failure(message: str) -> Envelope:
    return Envelope(success=False, message=message, data=None)
