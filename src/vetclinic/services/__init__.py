from .crud_dispatcher import CrudDispatcher
from .auth_service import AuthService

__all__ = ["CrudDispatcher", "AuthService"]
