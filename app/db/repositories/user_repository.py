from datetime import date
from typing import List
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.db.models.user import User as UserModel
from app.domains.users.entities import User
from app.domains.users.exceptions import NotFoundError, StoreError
from app.domains.users.repository import UserRepository

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(UserRepository):
    """Репозиторий пользователей поверх PostgreSQL"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, name: str, dob: date) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(name=name, dob=dob)

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
        except IntegrityError as e:
            await self.session.rollback()
            raise StoreError(f"constraint violation: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"failed to create user: {e}") from e
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: int) -> User:
        """Получение пользователя по id"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id == user_id)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"failed to get user: {e}") from e

        db_user = result.scalar_one_or_none()
        if db_user is None:
            raise NotFoundError(user_id)
        return self._to_domain(db_user)

    async def list(self, limit: int, offset: int) -> List[User]:
        """Получение страницы пользователей"""
        try:
            result = await self.session.execute(
                select(UserModel).order_by(UserModel.id).limit(limit).offset(offset)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"failed to list users: {e}") from e

        return [self._to_domain(user) for user in result.scalars().all()]

    async def count(self) -> int:
        """Общее количество пользователей"""
        try:
            result = await self.session.execute(select(func.count()).select_from(UserModel))
        except SQLAlchemyError as e:
            raise StoreError(f"failed to count users: {e}") from e
        return result.scalar_one()

    async def update(self, user_id: int, name: str, dob: date) -> User:
        """Полная замена имени и даты рождения"""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(name=name, dob=dob, updated_at=func.now())
            .returning(UserModel)
        )

        try:
            result = await self.session.execute(stmt)
            db_user = result.scalar_one_or_none()
            if db_user is None:
                await self.session.rollback()
                raise NotFoundError(user_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"failed to update user: {e}") from e

        return self._to_domain(db_user)

    async def delete(self, user_id: int) -> None:
        """Удаление пользователя"""
        stmt = delete(UserModel).where(UserModel.id == user_id)

        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"failed to delete user: {e}") from e

        if result.rowcount == 0:
            raise NotFoundError(user_id)

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            id=db_user.id,
            name=db_user.name,
            dob=db_user.dob,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )
