from app.domains.users.entities import User
from app.domains.users.exceptions import (
    UserServiceError, ValidationError, NotFoundError, StoreError
)
from app.domains.users.repository import UserRepository
from app.domains.users.schemas import (
    UserBase, UserCreate, UserUpdate, UserResponse, UserListResponse
)
from app.domains.users.services import UserService

__all__ = [
    "User",
    "UserServiceError", "ValidationError", "NotFoundError", "StoreError",
    "UserRepository",
    "UserBase", "UserCreate", "UserUpdate", "UserResponse", "UserListResponse",
    "UserService"
]
