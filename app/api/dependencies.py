from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.db.repositories.user_repository import SQLAlchemyUserRepository
from app.domains.users.services import UserService


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Сервис пользователей поверх сессии текущего запроса"""
    return UserService(SQLAlchemyUserRepository(db))
