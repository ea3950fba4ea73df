import logging
import os
from dotenv import load_dotenv

# Tải các biến môi trường từ tệp .env
load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

# Cơ sở dữ liệu
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "halal-biye")

# JWT: thời gian sống của token cũng là max-age của cookie
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 1440))

# Số vòng băm bcrypt cho mật khẩu
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

# Cookie phiên đăng nhập
TOKEN_COOKIE_NAME = "token"
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "true" if IS_PRODUCTION else "false").lower() == "true"
COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "none" if IS_PRODUCTION else "lax")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def validate_settings():
    """
    Kiểm tra các biến môi trường bắt buộc trước khi khởi động ứng dụng.
    """
    missing = [name for name, value in (("MONGO_URI", MONGO_URI), ("SECRET_KEY", SECRET_KEY)) if not value]
    if missing:
        raise ValueError(f"Không tìm thấy {', '.join(missing)} trong các biến môi trường.")


def init_logging():
    """Cấu hình logging một lần cho toàn bộ ứng dụng."""
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
