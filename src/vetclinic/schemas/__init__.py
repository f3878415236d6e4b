from .envelope import Envelope, success, failure
from .auth import RegisterRequest, LoginRequest, UserPublic, LoginResponse, RegisterResponse

__all__ = [
    "Envelope",
    "success",
    "failure",
    "RegisterRequest",
    "LoginRequest",
    "UserPublic",
    "LoginResponse",
    "RegisterResponse",
]
