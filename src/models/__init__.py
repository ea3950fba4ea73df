from .user import User, Gender
from .connection_request import ConnectionRequest, RequestStatus
from .database import init_db, close_db, DOCUMENT_MODELS
