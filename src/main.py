from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.routers import auth_router, user_router, request_router
from src.models import init_db, close_db
from src.exceptions import register_exception_handlers
from src import configs

# Cấu hình logging trước khi khởi tạo app
configs.init_logging()

# Khởi tạo app FastAPI với thông tin Swagger UI
app = FastAPI(
    title="Halal Biye",
    description="Backend ứng dụng kết nối hôn nhân **Halal Biye**.\n\n"
                "Hệ thống hỗ trợ đăng ký, đăng nhập, chỉnh sửa hồ sơ, duyệt hồ sơ "
                "và gửi/chấp nhận/từ chối yêu cầu kết nối.",
    version="1.0.0"
)

# Cho phép client (có cookie) từ các origin đã cấu hình
app.add_middleware(
    CORSMiddleware,
    allow_origins=configs.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mọi lỗi đều được xử lý tập trung tại đây
register_exception_handlers(app)

# Kết nối với cơ sở dữ liệu khi khởi động
@app.on_event("startup")
async def startup_db_client():
    configs.validate_settings()
    await init_db()

@app.on_event("shutdown")
async def shutdown_db_client():
    close_db()

# Gắn các router
app.include_router(auth_router.router, prefix="/api/v1/users", tags=["Xác thực"])
app.include_router(user_router.router, prefix="/api/v1/users", tags=["Người dùng"])
app.include_router(request_router.router, prefix="/api/v1/requests", tags=["Yêu cầu kết nối"])

@app.get("/")
def read_root():
    return {"message": "Máy chủ Halal Biye đang chạy"}
