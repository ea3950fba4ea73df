import logging
import math
from datetime import datetime
from typing import List, Optional
from beanie.operators import Set
from beanie import UpdateResponse
from ..models import User, ConnectionRequest
from ..schemas import UserUpdate
from ..exceptions import AppError

logger = logging.getLogger(__name__)

class UserService:

    @staticmethod
    async def get_user_by_email(email: str) -> User:
        """
        Lấy người dùng theo email.
        """
        user = await User.find_one(User.email == email)
        if not user:
            raise AppError(404, "Không tìm thấy người dùng.")
        return user

    @staticmethod
    async def update_user_profile(email: str, user_update: UserUpdate) -> User:
        """
        Cập nhật hồ sơ của người dùng.
        Chỉ các trường hồ sơ được phép thay đổi; email và mật khẩu không bao giờ bị chạm tới.
        """
        fields = user_update.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            return await UserService.get_user_by_email(email)

        fields["updatedAt"] = datetime.utcnow()
        user = await User.find_one(User.email == email).update(
            Set(fields),
            response_type=UpdateResponse.NEW_DOCUMENT
        )
        if not user:
            raise AppError(404, "Không tìm thấy người dùng.")

        logger.info("Đã cập nhật hồ sơ %s: %s", email, ", ".join(sorted(fields)))
        return user

    @staticmethod
    def compute_connection_status(requests: List[ConnectionRequest], current_user_id: str) -> dict:
        """
        Tính trạng thái kết nối của người dùng hiện tại với từng người khác.

        - 'accepted' nếu có bất kỳ yêu cầu nào giữa hai người (cả hai chiều) đã được chấp nhận;
        - nếu không, trạng thái của yêu cầu mà người dùng hiện tại là người gửi;
        - những người còn lại không có trong kết quả (tức là 'none').
        """
        status_map = {}
        for req in requests:
            if req.status == 'accepted':
                other_id = req.toUser if req.fromUser == current_user_id else req.fromUser
                status_map[other_id] = 'accepted'
            elif req.fromUser == current_user_id and status_map.get(req.toUser) != 'accepted':
                status_map[req.toUser] = req.status
        return status_map

    @staticmethod
    async def get_users(filters: dict, current_user_email: str, page: int = 1, limit: Optional[int] = None):
        """
        Lấy danh sách người dùng khớp các bộ lọc, kèm connectionStatus so với người dùng hiện tại.

        Returns:
            tuple: (danh sách (User, connectionStatus), meta phân trang)
        """
        current_user = await User.find_one(User.email == current_user_email)
        if not current_user:
            raise AppError(404, "Không tìm thấy người dùng hiện tại.")
        current_user_id = str(current_user.id)

        total = await User.find(filters).count()
        query = User.find(filters).sort("+createdAt", "+_id")
        if limit:
            query = query.skip((page - 1) * limit).limit(limit)
        users = await query.to_list()

        user_ids = [str(u.id) for u in users]
        requests = await ConnectionRequest.find(
            {
                "$or": [
                    {"fromUser": current_user_id, "toUser": {"$in": user_ids}},
                    {"fromUser": {"$in": user_ids}, "toUser": current_user_id}
                ]
            }
        ).to_list()
        status_map = UserService.compute_connection_status(requests, current_user_id)

        meta = {
            "page": page if limit else 1,
            "limit": limit or total,
            "total": total,
            "totalPage": math.ceil(total / limit) if limit else 1,
        }
        return [(user, status_map.get(str(user.id), 'none')) for user in users], meta
