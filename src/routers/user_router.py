from fastapi import APIRouter, Depends, status
from ..services import UserService
from ..schemas import UserUpdate, UserFilter
from ..security import get_current_user_email
from ..utils.map_to_dict import map_user_to_public_dict, map_user_with_status
from ..utils.send_response import send_response

router = APIRouter(tags=["User"])

# Lấy hồ sơ của người dùng hiện tại
@router.get("/me")
async def read_users_me(email: str = Depends(get_current_user_email)):
    """
    Lấy hồ sơ của người dùng hiện được xác thực.
    """
    user = await UserService.get_user_by_email(email)
    return send_response(status.HTTP_200_OK, "Lấy hồ sơ thành công.", map_user_to_public_dict(user))

# Cập nhật hồ sơ của người dùng hiện tại
@router.put("/me")
async def update_user_me(user_update: UserUpdate, email: str = Depends(get_current_user_email)):
    """
    Cập nhật một phần hồ sơ của người dùng hiện tại.
    Chỉ nhận name, age, gender, religion, location, height, education, occupation.
    """
    updated_user = await UserService.update_user_profile(email, user_update)
    return send_response(status.HTTP_200_OK, "Cập nhật hồ sơ thành công.", map_user_to_public_dict(updated_user))

# Duyệt hồ sơ của những người dùng khác
@router.get("")
async def get_users(filters: UserFilter = Depends(), email: str = Depends(get_current_user_email)):
    """
    Lấy danh sách người dùng khớp các bộ lọc (ví dụ ?gender=Female&religion=Islam),
    mỗi người kèm connectionStatus so với người dùng hiện tại.
    Người dùng hiện tại luôn bị loại khỏi kết quả.
    """
    query = filters.to_query()
    query["email"] = {"$ne": email}

    users, meta = await UserService.get_users(query, email, page=filters.page, limit=filters.limit)
    data = [map_user_with_status(user, connection_status) for user, connection_status in users]
    return send_response(status.HTTP_200_OK, "Lấy danh sách người dùng thành công.", data, meta=meta)
