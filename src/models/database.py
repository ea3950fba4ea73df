# Nhập các thư viện cần thiết
import logging
from motor.motor_asyncio import AsyncIOMotorClient # Thư viện bất đồng bộ cho MongoDB
from beanie import init_beanie # ODM (Object-Document Mapper) cho MongoDB
from typing import Type

from .. import configs
from .user import User
from .connection_request import ConnectionRequest

logger = logging.getLogger(__name__)

# Danh sách các model Beanie sẽ được khởi tạo
DOCUMENT_MODELS: list[Type] = [User, ConnectionRequest]

client = None  # client global, dùng 1 lần suốt vòng đời app

async def init_db():
    """
    Khởi tạo kết nối cơ sở dữ liệu và Beanie ODM.
    Đảm bảo chỉ tạo một client duy nhất.
    """
    global client

    # Nếu đã có client, bỏ qua
    if client is not None:
        return client

    if not configs.MONGO_URI:
        raise ValueError("Không tìm thấy MONGO_URI trong các biến môi trường.")

    client = AsyncIOMotorClient(configs.MONGO_URI)
    database = client.get_database(configs.MONGO_DB_NAME)

    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    logger.info("Đã kết nối MongoDB, database '%s'", configs.MONGO_DB_NAME)

    return client

def close_db():
    """Đóng client khi ứng dụng tắt."""
    global client
    if client is not None:
        client.close()
        client = None
