import logging
from fastapi import APIRouter, Depends, status
from ..services import AuthService, jwt_service
from ..security import get_current_user_email
from ..schemas import UserCreate, UserLogin, LoginResult
from ..utils.map_to_dict import map_user_to_public_dict
from ..utils.send_response import send_response
from .. import configs

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

@router.post("/register")
async def register_user(user_data: UserCreate):
    """
    Endpoint để đăng ký người dùng mới.
    - Nhận email, mật khẩu và các trường hồ sơ tùy chọn.
    - Gọi AuthService để xử lý logic đăng ký.
    - Trả về thông tin người dùng công khai (không có mật khẩu).
    - Lỗi 409 nếu email đã tồn tại, 400 nếu dữ liệu không hợp lệ.
    """
    new_user = await AuthService.register_user(
        email=user_data.email,
        password=user_data.password,
        profile_data=user_data.profile_data()
    )
    return send_response(status.HTTP_200_OK, "Đăng ký thành công.", map_user_to_public_dict(new_user))

@router.post("/login")
async def login_user(login_data: UserLogin):
    """
    Endpoint để đăng nhập.
    - Xác thực email và mật khẩu.
    - Tạo token JWT (sub = email) và đặt vào cookie HTTP-only.
    - Trả về hồ sơ người dùng kèm token cho client không dùng cookie.
    - Lỗi 404 nếu không có người dùng, 401 nếu sai mật khẩu.
    """
    user = await AuthService.login_user(email=login_data.email, password=login_data.password)
    token = AuthService.issue_token(user)

    response = send_response(
        status.HTTP_200_OK,
        "Đăng nhập thành công.",
        LoginResult(**map_user_to_public_dict(user), token=token).model_dump()
    )
    # Cookie sống đúng bằng thời gian sống của token
    response.set_cookie(
        key=configs.TOKEN_COOKIE_NAME,
        value=token,
        max_age=int(jwt_service.token_lifetime().total_seconds()),
        httponly=True,
        secure=configs.COOKIE_SECURE,
        samesite=configs.COOKIE_SAMESITE,
    )
    return response

@router.post("/logout")
async def logout_user(email: str = Depends(get_current_user_email)):
    """
    Endpoint để đăng xuất: xóa cookie phiên ngay lập tức.
    """
    logger.info("Người dùng đã đăng xuất: %s", email)
    response = send_response(status.HTTP_200_OK, "Đăng xuất thành công.", {})
    response.delete_cookie(
        key=configs.TOKEN_COOKIE_NAME,
        httponly=True,
        secure=configs.COOKIE_SECURE,
        samesite=configs.COOKIE_SAMESITE,
    )
    return response
