from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

def send_response(status_code: int, message: str, data: Any = None, meta: Optional[dict] = None) -> JSONResponse:
    """
    Trả về phản hồi thành công theo định dạng thống nhất
    { success, message, data, meta? }.
    """
    content = {
        "success": True,
        "message": message,
        "data": data,
    }
    if meta is not None:
        content["meta"] = meta
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
