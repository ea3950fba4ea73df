from beanie import Document
from pydantic import Field
from pymongo import IndexModel
from typing import Literal
from datetime import datetime

RequestStatus = Literal['pending', 'accepted', 'rejected']

class ConnectionRequest(Document):
    """
    Đại diện cho một lời đề nghị kết nối có hướng từ người này đến người khác.

    Chỉ chuyển trạng thái đúng một lần: pending -> accepted hoặc pending -> rejected.
    """
    fromUser: str = Field(..., description="ID của người gửi yêu cầu.")
    toUser: str = Field(..., description="ID của người nhận yêu cầu.")
    status: RequestStatus = Field(default='pending', description="Trạng thái của yêu cầu.")
    createdAt: datetime = Field(default_factory=datetime.utcnow, description="Thời điểm yêu cầu được tạo.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="Thời điểm trạng thái thay đổi lần cuối.")

    class Settings:
        name = "connectionRequests"
        indexes = [
            # Mỗi cặp (người gửi, người nhận) có thứ tự chỉ có một yêu cầu
            IndexModel([("fromUser", 1), ("toUser", 1)], unique=True),
            "toUser",
            "status",
        ]
