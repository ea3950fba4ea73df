from beanie import Document
from pydantic import Field, EmailStr
from pymongo import IndexModel
from typing import Optional, Literal
from datetime import datetime

Gender = Literal['Male', 'Female', 'Other']

class User(Document):
    """
    Đại diện cho một người đăng ký trong collection 'users'.
    """
    email: EmailStr = Field(..., description="Địa chỉ email duy nhất, dùng làm định danh đăng nhập.")
    hashedPassword: str = Field(..., description="Mật khẩu đã được băm (bcrypt), không bao giờ trả ra ngoài.")

    name: Optional[str] = Field(default=None, description="Tên hiển thị.")
    age: Optional[int] = Field(default=None, ge=0, description="Tuổi.")
    gender: Optional[Gender] = Field(default=None, description="Giới tính: Male, Female hoặc Other.")
    religion: Optional[str] = Field(default=None, description="Tôn giáo.")
    location: Optional[str] = Field(default=None, description="Nơi sống.")
    height: Optional[float] = Field(default=None, gt=0, description="Chiều cao (cm).")
    education: Optional[str] = Field(default=None, description="Trình độ học vấn.")
    occupation: Optional[str] = Field(default=None, description="Nghề nghiệp.")

    createdAt: datetime = Field(default_factory=datetime.utcnow, description="Thời điểm người dùng được tạo.")
    updatedAt: datetime = Field(default_factory=datetime.utcnow, description="Thời điểm hồ sơ được cập nhật lần cuối.")

    class Settings:
        name = "users"
        indexes = [
            IndexModel("email", unique=True),
            "gender",
            "religion",
        ]
