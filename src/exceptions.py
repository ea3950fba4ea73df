import logging
import re
import traceback
from bson.errors import InvalidId
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import configs

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Lỗi nghiệp vụ mang theo mã trạng thái HTTP.

    Ví dụ:
        raise AppError(404, "Không tìm thấy người dùng.")
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def error_response(status_code: int, message: str, error_sources: list, exc: Exception | None = None) -> JSONResponse:
    """Tạo phản hồi lỗi theo định dạng thống nhất."""
    content = {
        "success": False,
        "message": message,
        "errorSources": error_sources,
    }
    # Chỉ đính kèm stack trace ngoài môi trường production
    if not configs.IS_PRODUCTION and exc is not None:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content)


def _validation_sources(errors) -> list:
    # Dùng phần cuối của vị trí lỗi làm tên trường, giống client mong đợi
    sources = []
    for error in errors:
        loc = error.get("loc") or ()
        path = str(loc[-1]) if loc else ""
        sources.append({"path": path, "message": error.get("msg", "Dữ liệu không hợp lệ")})
    return sources


async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message, [{"path": "", "message": exc.message}], exc)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", _validation_sources(exc.errors()), exc)


async def pydantic_validation_handler(request: Request, exc: ValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", _validation_sources(exc.errors()), exc)


async def invalid_id_handler(request: Request, exc: InvalidId):
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid ID", [{"path": "id", "message": str(exc)}], exc)


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    """
    Lỗi trùng khóa từ MongoDB. Chỉ trích giá trị bị trùng, không bao giờ trả
    nguyên lỗi của driver về client.
    """
    key_value = (exc.details or {}).get("keyValue") or {}
    if key_value:
        value = ", ".join(str(v) for v in key_value.values())
    else:
        match = re.search(r'"([^"]*)"', str(exc))
        value = match.group(1) if match else ""
    message = f"{value} đã tồn tại" if value else "Dữ liệu đã tồn tại"
    return error_response(status.HTTP_409_CONFLICT, message, [{"path": "", "message": message}], exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "API Not Found !!"
    else:
        message = str(exc.detail)
    response = error_response(exc.status_code, message, [{"path": request.url.path, "message": message}])
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Lỗi không xác định khi xử lý %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Something went wrong!",
        [{"path": "", "message": "Something went wrong"}],
        exc,
    )


def register_exception_handlers(app: FastAPI):
    """Gắn toàn bộ exception handler vào app. Router không tự tạo phản hồi lỗi."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(InvalidId, invalid_id_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
