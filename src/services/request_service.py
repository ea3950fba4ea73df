import logging
from datetime import datetime
from typing import List
from bson import ObjectId
from beanie import UpdateResponse
from beanie.operators import Set
from pymongo.errors import DuplicateKeyError
from ..models import User, ConnectionRequest
from ..exceptions import AppError

logger = logging.getLogger(__name__)

class RequestService:
    """
    Vòng đời của yêu cầu kết nối:
    pending -> accepted, pending -> rejected. Không có chuyển trạng thái nào khác,
    người gửi không thể hủy. Danh tính người gọi luôn được xác định lại từ email.
    """

    @staticmethod
    async def _resolve_user(email: str, message: str = "Không tìm thấy người dùng.") -> User:
        user = await User.find_one(User.email == email)
        if not user:
            raise AppError(404, message)
        return user

    @staticmethod
    async def _users_by_ids(user_ids: List[str]) -> dict:
        """Lấy nhiều người dùng trong một truy vấn, trả về dict theo ID."""
        object_ids = [ObjectId(uid) for uid in set(user_ids) if ObjectId.is_valid(uid)]
        if not object_ids:
            return {}
        users = await User.find({"_id": {"$in": object_ids}}).to_list()
        return {str(user.id): user for user in users}

    @staticmethod
    async def send_connection_request(from_email: str, to_user_id: str) -> ConnectionRequest:
        """
        Gửi một yêu cầu kết nối từ người dùng hiện tại đến người dùng khác.

        Raises:
            AppError: 404 nếu không tìm thấy người gửi hoặc người nhận,
                400 nếu tự gửi cho chính mình, 409 nếu yêu cầu đã tồn tại.
            InvalidId: nếu to_user_id không phải ObjectId hợp lệ.
        """
        from_user = await RequestService._resolve_user(from_email, "Không tìm thấy người gửi yêu cầu.")
        from_user_id = str(from_user.id)

        if from_user_id == to_user_id:
            raise AppError(400, "Không thể gửi yêu cầu cho chính mình.")

        # Chuẩn hóa ID người nhận, ném InvalidId nếu sai định dạng
        to_user_id = str(ObjectId(to_user_id))
        if from_user_id == to_user_id:
            raise AppError(400, "Không thể gửi yêu cầu cho chính mình.")

        if not await User.get(ObjectId(to_user_id)):
            raise AppError(404, "Không tìm thấy người nhận yêu cầu.")

        # Tính duy nhất theo chiều: A -> B và B -> A là hai yêu cầu độc lập
        existing = await ConnectionRequest.find_one(
            ConnectionRequest.fromUser == from_user_id,
            ConnectionRequest.toUser == to_user_id
        )
        if existing:
            raise AppError(409, "Yêu cầu đã tồn tại.")

        new_request = ConnectionRequest(fromUser=from_user_id, toUser=to_user_id)
        try:
            await new_request.insert()
        except DuplicateKeyError:
            # Hai yêu cầu gửi đồng thời cho cùng một cặp, chỉ mục unique chặn lại
            raise AppError(409, "Yêu cầu đã tồn tại.")

        logger.info("Yêu cầu kết nối %s: %s -> %s", new_request.id, from_user_id, to_user_id)
        return new_request

    @staticmethod
    async def get_incoming_requests(email: str):
        """
        Lấy tất cả yêu cầu gửi đến người dùng, kèm thông tin người gửi.

        Returns:
            list: danh sách (ConnectionRequest, User người gửi)
        """
        user = await RequestService._resolve_user(email)
        requests = await ConnectionRequest.find(
            ConnectionRequest.toUser == str(user.id)
        ).sort("-createdAt").to_list()

        senders = await RequestService._users_by_ids([req.fromUser for req in requests])
        return [(req, senders.get(req.fromUser)) for req in requests]

    @staticmethod
    async def get_outgoing_requests(email: str):
        """
        Lấy tất cả yêu cầu người dùng đã gửi, kèm thông tin người nhận.

        Returns:
            list: danh sách (ConnectionRequest, User người nhận)
        """
        user = await RequestService._resolve_user(email)
        requests = await ConnectionRequest.find(
            ConnectionRequest.fromUser == str(user.id)
        ).sort("-createdAt").to_list()

        recipients = await RequestService._users_by_ids([req.toUser for req in requests])
        return [(req, recipients.get(req.toUser)) for req in requests]

    @staticmethod
    async def accept_request(request_id: str, email: str) -> ConnectionRequest:
        """Chấp nhận một yêu cầu đang chờ, chỉ người nhận mới được phép."""
        return await RequestService._respond(request_id, email, 'accepted')

    @staticmethod
    async def decline_request(request_id: str, email: str) -> ConnectionRequest:
        """Từ chối một yêu cầu đang chờ, chỉ người nhận mới được phép."""
        return await RequestService._respond(request_id, email, 'rejected')

    @staticmethod
    async def _respond(request_id: str, email: str, new_status: str) -> ConnectionRequest:
        """
        Chuyển yêu cầu từ pending sang new_status.

        Raises:
            AppError: 404 nếu không tìm thấy người dùng hoặc yêu cầu,
                403 nếu người gọi không phải người nhận,
                400 nếu yêu cầu không còn ở trạng thái pending.
        """
        user = await RequestService._resolve_user(email)
        user_id = str(user.id)

        request_oid = ObjectId(request_id)
        connection_request = await ConnectionRequest.get(request_oid)
        if not connection_request:
            raise AppError(404, "Không tìm thấy yêu cầu.")

        if connection_request.toUser != user_id:
            raise AppError(403, "Bạn không có quyền phản hồi yêu cầu này.")

        if connection_request.status != 'pending':
            raise AppError(400, "Yêu cầu không còn ở trạng thái chờ.")

        # Cập nhật có điều kiện: chỉ một lời gọi đồng thời thắng, lời gọi còn lại nhận 400
        updated = await ConnectionRequest.find_one(
            ConnectionRequest.id == request_oid,
            ConnectionRequest.status == 'pending'
        ).update(
            Set({"status": new_status, "updatedAt": datetime.utcnow()}),
            response_type=UpdateResponse.NEW_DOCUMENT
        )
        if not updated:
            raise AppError(400, "Yêu cầu không còn ở trạng thái chờ.")

        logger.info("Yêu cầu %s đã chuyển sang %s bởi %s", request_id, new_status, user_id)
        return updated
