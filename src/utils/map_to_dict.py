from typing import Optional
from ..schemas.user_schema import UserPublic, UserWithStatus, UserSummary
from ..schemas.request_schema import ConnectionRequestPublic, IncomingRequestPublic, OutgoingRequestPublic
from ..models.user import User
from ..models.connection_request import ConnectionRequest

# Các hàm trợ giúp để chuyển đổi các đối tượng mô hình thành từ điển trả về client.
# Mọi biểu diễn User ra ngoài đều đi qua đây nên hashedPassword không bao giờ bị lộ.

def _profile(user: User) -> dict:
    return {
        "name": user.name,
        "age": user.age,
        "gender": user.gender,
        "religion": user.religion,
        "location": user.location,
        "height": user.height,
        "education": user.education,
        "occupation": user.occupation,
    }

def map_user_to_public_dict(user: User) -> dict:
    """Chuyển đổi một mô hình User thành từ điển công khai (không có mật khẩu)."""
    public_user = UserPublic(
        id=str(user.id),
        email=user.email,
        createdAt=user.createdAt,
        updatedAt=user.updatedAt,
        **_profile(user)
    )
    return public_user.model_dump()

def map_user_with_status(user: User, connection_status: str) -> dict:
    public_user = UserWithStatus(
        id=str(user.id),
        email=user.email,
        createdAt=user.createdAt,
        updatedAt=user.updatedAt,
        connectionStatus=connection_status,
        **_profile(user)
    )
    return public_user.model_dump()

def map_user_to_summary(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return UserSummary(id=str(user.id), email=user.email, **_profile(user)).model_dump()

def map_request_to_public_dict(request: ConnectionRequest) -> dict:
    """Chuyển đổi một mô hình ConnectionRequest thành từ điển có thể tuần tự hóa JSON."""
    public_request = ConnectionRequestPublic(
        id=str(request.id),
        fromUser=request.fromUser,
        toUser=request.toUser,
        status=request.status,
        createdAt=request.createdAt,
        updatedAt=request.updatedAt
    )
    return public_request.model_dump()

def map_incoming_request(request: ConnectionRequest, from_user: Optional[User]) -> dict:
    return IncomingRequestPublic(
        id=str(request.id),
        fromUser=map_user_to_summary(from_user),
        toUser=request.toUser,
        status=request.status,
        createdAt=request.createdAt,
        updatedAt=request.updatedAt
    ).model_dump()

def map_outgoing_request(request: ConnectionRequest, to_user: Optional[User]) -> dict:
    return OutgoingRequestPublic(
        id=str(request.id),
        fromUser=request.fromUser,
        toUser=map_user_to_summary(to_user),
        status=request.status,
        createdAt=request.createdAt,
        updatedAt=request.updatedAt
    ).model_dump()
