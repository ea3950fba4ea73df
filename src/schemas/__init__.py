from .auth_schema import UserCreate, UserLogin, LoginResult
from .user_schema import ProfileFields, UserUpdate, UserFilter, UserPublic, UserWithStatus, UserSummary
from .request_schema import (
    ConnectionRequestCreate,
    ConnectionRequestAction,
    ConnectionRequestPublic,
    IncomingRequestPublic,
    OutgoingRequestPublic
)
