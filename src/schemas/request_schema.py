from pydantic import BaseModel, Field
from datetime import datetime
from .user_schema import UserSummary

class ConnectionRequestCreate(BaseModel):
    toUser: str = Field(..., min_length=1, description="ID của người nhận yêu cầu")

class ConnectionRequestAction(BaseModel):
    id: str = Field(..., min_length=1, description="ID của yêu cầu cần chấp nhận hoặc từ chối")

class ConnectionRequestPublic(BaseModel):
    id: str
    fromUser: str
    toUser: str
    status: str
    createdAt: datetime
    updatedAt: datetime

class IncomingRequestPublic(BaseModel):
    id: str
    fromUser: UserSummary | None
    toUser: str
    status: str
    createdAt: datetime
    updatedAt: datetime

class OutgoingRequestPublic(BaseModel):
    id: str
    fromUser: str
    toUser: UserSummary | None
    status: str
    createdAt: datetime
    updatedAt: datetime
