from .auth_service import AuthService
from .jwt_service import create_access_token, decode_access_token
from .user_service import UserService
from .request_service import RequestService

__all__ = [
    "AuthService",
    "create_access_token",
    "decode_access_token",
    "UserService",
    "RequestService"
]
