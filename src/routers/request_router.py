from fastapi import APIRouter, Depends, status
from ..services import RequestService
from ..schemas import ConnectionRequestCreate, ConnectionRequestAction
from ..security import get_current_user_email
from ..utils.map_to_dict import map_request_to_public_dict, map_incoming_request, map_outgoing_request
from ..utils.send_response import send_response

router = APIRouter(tags=["Connection request"])

# Gửi yêu cầu kết nối
@router.post("")
async def send_request(request_data: ConnectionRequestCreate, email: str = Depends(get_current_user_email)):
    """
    Gửi một yêu cầu kết nối từ người dùng hiện tại đến người dùng khác.
    - 400 nếu gửi cho chính mình, 404 nếu không tìm thấy người gửi/nhận, 409 nếu đã tồn tại.
    """
    new_request = await RequestService.send_connection_request(email, request_data.toUser)
    return send_response(status.HTTP_201_CREATED, "Gửi yêu cầu thành công.", map_request_to_public_dict(new_request))

# Lấy danh sách yêu cầu gửi đến
@router.get("/incoming")
async def get_incoming_requests(email: str = Depends(get_current_user_email)):
    requests = await RequestService.get_incoming_requests(email)
    data = [map_incoming_request(req, sender) for req, sender in requests]
    return send_response(status.HTTP_200_OK, "Lấy yêu cầu đến thành công.", data)

# Lấy danh sách yêu cầu đã gửi
@router.get("/outgoing")
async def get_outgoing_requests(email: str = Depends(get_current_user_email)):
    requests = await RequestService.get_outgoing_requests(email)
    data = [map_outgoing_request(req, recipient) for req, recipient in requests]
    return send_response(status.HTTP_200_OK, "Lấy yêu cầu đã gửi thành công.", data)

# Chấp nhận yêu cầu
@router.post("/accept")
async def accept_request(action: ConnectionRequestAction, email: str = Depends(get_current_user_email)):
    """
    Chấp nhận một yêu cầu đang chờ. Chỉ người nhận yêu cầu mới được phép.
    """
    updated = await RequestService.accept_request(action.id, email)
    return send_response(status.HTTP_200_OK, "Đã chấp nhận yêu cầu.", map_request_to_public_dict(updated))

# Từ chối yêu cầu
@router.post("/decline")
async def decline_request(action: ConnectionRequestAction, email: str = Depends(get_current_user_email)):
    """
    Từ chối một yêu cầu đang chờ. Chỉ người nhận yêu cầu mới được phép.
    """
    updated = await RequestService.decline_request(action.id, email)
    return send_response(status.HTTP_200_OK, "Đã từ chối yêu cầu.", map_request_to_public_dict(updated))
