from pydantic import BaseModel, EmailStr, Field
from .user_schema import ProfileFields, UserPublic

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=20)

class UserCreate(ProfileFields):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=20)

    def profile_data(self) -> dict:
        """Các trường hồ sơ được gửi kèm, không gồm email và mật khẩu."""
        return self.model_dump(exclude={"email", "password"}, exclude_none=True)

class LoginResult(UserPublic):
    token: str
