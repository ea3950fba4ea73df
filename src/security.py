import logging
from typing import Optional
from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from .services import jwt_service
from .exceptions import AppError
from . import configs

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

def extract_token(
    credentials: Optional[HTTPAuthorizationCredentials],
    cookie_token: Optional[str],
) -> Optional[str]:
    """Ưu tiên header Authorization: Bearer, sau đó mới tới cookie phiên."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return cookie_token or None

async def get_current_user_email(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_cookie: Optional[str] = Cookie(default=None, alias=configs.TOKEN_COOKIE_NAME),
) -> str:
    """
    Xác thực token của mỗi lời gọi được bảo vệ và trả về email của người gọi.
    """
    token = extract_token(credentials, token_cookie)
    if not token:
        logger.debug("Thiếu token khi gọi %s", request.url.path)
        raise AppError(401, "Unauthorized")

    token_data = jwt_service.decode_access_token(token)
    if not token_data or not token_data.email:
        logger.debug("Token không hợp lệ hoặc đã hết hạn khi gọi %s", request.url.path)
        raise AppError(401, "Unauthorized")

    return token_data.email
