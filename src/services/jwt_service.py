from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from pydantic import BaseModel
from .. import configs

def token_lifetime() -> timedelta:
    """Thời gian sống của token, cũng chính là max-age của cookie phiên."""
    return timedelta(minutes=configs.ACCESS_TOKEN_EXPIRE_MINUTES)

class TokenData(BaseModel):
    """Mô hình dữ liệu cho payload được giải mã từ token."""
    email: Optional[str] = None

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Tạo một token truy cập JWT mới.

    Args:
        data (dict): Dữ liệu (payload) để mã hóa vào token, gồm 'sub' là email người dùng.
        expires_delta (Optional[timedelta]): Thời gian tồn tại của token. Mặc định lấy từ cấu hình.

    Returns:
        str: Token JWT đã được mã hóa.
    """
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or token_lifetime())
    to_encode.update({"exp": expire, "iat": datetime.utcnow()})

    # Mã hóa token với khóa bí mật và thuật toán đã định cấu hình
    return jwt.encode(to_encode, configs.SECRET_KEY, algorithm=configs.ALGORITHM)

def decode_access_token(token: str) -> Optional[TokenData]:
    """
    Giải mã một token truy cập JWT và trả về payload của nó.

    Args:
        token (str): Token JWT để giải mã.

    Returns:
        Optional[TokenData]: Dữ liệu payload nếu chữ ký và hạn dùng hợp lệ, nếu không thì None.
    """
    try:
        payload = jwt.decode(token, configs.SECRET_KEY, algorithms=[configs.ALGORITHM])
    except JWTError:
        # Hết hạn, sai chữ ký hoặc sai định dạng
        return None
    email = payload.get("sub")
    if not email:
        return None
    return TokenData(email=email)
