from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from ..models.user import Gender

class ProfileFields(BaseModel):
    """Các trường hồ sơ tùy chọn, dùng chung cho đăng ký và cập nhật."""
    name: Optional[str] = Field(default=None, max_length=50)
    age: Optional[int] = Field(default=None, ge=0)
    gender: Optional[Gender] = None
    religion: Optional[str] = Field(default=None, max_length=30)
    location: Optional[str] = Field(default=None, max_length=100)
    height: Optional[float] = Field(default=None, gt=0, description="Chiều cao (cm)")
    education: Optional[str] = Field(default=None, max_length=50)
    occupation: Optional[str] = Field(default=None, max_length=50)

class UserUpdate(ProfileFields):
    """
    Dữ liệu cập nhật hồ sơ. Email và mật khẩu không thể đổi qua đường này,
    các khóa lạ bị bỏ qua.
    """
    pass

class UserFilter(BaseModel):
    """Bộ lọc bằng (equality) khi duyệt danh sách hồ sơ, lấy từ query string."""
    name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    gender: Optional[Gender] = None
    religion: Optional[str] = None
    location: Optional[str] = None
    height: Optional[float] = Field(default=None, gt=0)
    education: Optional[str] = None
    occupation: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1, le=100)

    @field_validator('name', 'religion', 'location', 'education', 'occupation')
    @classmethod
    def strip_empty(cls, v: Optional[str]) -> Optional[str]:
        # ?religion= (rỗng) được coi như không lọc
        if v is not None and not v.strip():
            return None
        return v

    def to_query(self) -> dict:
        """Chỉ giữ các trường hồ sơ đã được truyền vào."""
        return self.model_dump(exclude_none=True, exclude={"page", "limit"})

class UserPublic(BaseModel):
    id: str
    email: EmailStr
    name: str | None = None
    age: int | None = None
    gender: str | None = None
    religion: str | None = None
    location: str | None = None
    height: float | None = None
    education: str | None = None
    occupation: str | None = None
    createdAt: datetime | None = None
    updatedAt: datetime | None = None

class UserWithStatus(UserPublic):
    connectionStatus: str = "none"  # 'accepted', 'pending', 'rejected', 'none'

class UserSummary(BaseModel):
    """Thông tin rút gọn của người dùng khi mở rộng một yêu cầu kết nối."""
    id: str
    name: str | None = None
    email: EmailStr
    age: int | None = None
    gender: str | None = None
    religion: str | None = None
    location: str | None = None
    height: float | None = None
    education: str | None = None
    occupation: str | None = None
