from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class UserBase(BaseModel):
    """Базовая схема пользователя"""
    name: str = Field(..., min_length=2, max_length=100)
    dob: str = Field(..., min_length=1, description="Date of birth, YYYY-MM-DD")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v


class UserCreate(UserBase):
    """Схема для создания пользователя"""
    pass


class UserUpdate(UserBase):
    """Схема для полной замены данных пользователя"""
    pass


class UserResponse(BaseModel):
    """Схема ответа; age заполняется только при чтении"""
    id: int
    name: str
    dob: str
    age: Optional[int] = None


class UserListResponse(BaseModel):
    """Страница пользователей с метаданными пагинации"""
    data: List[UserResponse]
    total: int
    page: int
    limit: int
    total_pages: int
