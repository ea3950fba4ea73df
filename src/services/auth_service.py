import logging
from passlib.context import CryptContext
from pymongo.errors import DuplicateKeyError
from ..models.user import User
from ..exceptions import AppError
from . import jwt_service
from .. import configs

logger = logging.getLogger(__name__)

# Thiết lập ngữ cảnh băm mật khẩu
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=configs.BCRYPT_ROUNDS)

class AuthService:

    @staticmethod
    def verify_password(plain_password, hashed_password):
        """Xác minh mật khẩu thuần túy với mật khẩu đã được băm."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password):
        """Băm một mật khẩu thuần túy."""
        return pwd_context.hash(password)

    @staticmethod
    async def register_user(email: str, password: str, profile_data: dict) -> User:
        """
        Xử lý đăng ký người dùng mới.
        Kiểm tra email đã tồn tại, băm mật khẩu và tạo người dùng.

        Raises:
            AppError: 409 nếu email đã được đăng ký.
        """
        if await User.find_one(User.email == email):
            raise AppError(409, "Email đã được đăng ký.")

        # Salt được passlib xử lý tự động và là một phần của chuỗi băm.
        new_user = User(
            email=email,
            hashedPassword=AuthService.get_password_hash(password),
            **profile_data
        )

        try:
            await new_user.insert()
        except DuplicateKeyError:
            # Hai yêu cầu đăng ký cùng email chạy song song, chỉ mục unique chặn lại
            raise AppError(409, "Email đã được đăng ký.")

        logger.info("Người dùng mới đã đăng ký: %s", email)
        return new_user

    @staticmethod
    async def login_user(email: str, password: str) -> User:
        """
        Xử lý đăng nhập của người dùng.
        Tìm người dùng bằng email và xác minh mật khẩu.

        Raises:
            AppError: 404 nếu không có người dùng, 401 nếu sai mật khẩu.
        """
        user = await User.find_one(User.email == email)
        if not user:
            raise AppError(404, "Không tìm thấy người dùng.")

        if not AuthService.verify_password(password, user.hashedPassword):
            logger.info("Đăng nhập thất bại (sai mật khẩu): %s", email)
            raise AppError(401, "Email hoặc mật khẩu không chính xác.")

        logger.info("Người dùng đã đăng nhập: %s", email)
        return user

    @staticmethod
    def issue_token(user: User) -> str:
        """Tạo token truy cập với email làm chủ thể (sub)."""
        return jwt_service.create_access_token(data={"sub": user.email})
