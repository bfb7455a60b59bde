"""
Контракт хранилища пользователей.

Сервис зависит только от этого интерфейса, поэтому в тестах его можно
заменить реализацией в памяти. Даты передаются как ``datetime.date``,
без времени и часового пояса.

Реализации: ``SQLAlchemyUserRepository`` (app.db.repositories).
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List

from app.domains.users.entities import User


class UserRepository(ABC):
    """Абстрактный репозиторий пользователей"""

    @abstractmethod
    async def create(self, name: str, dob: date) -> User:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User:
        """Raises NotFoundError"""

    @abstractmethod
    async def list(self, limit: int, offset: int) -> List[User]:
        """Страница пользователей, упорядоченная по id по возрастанию"""

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def update(self, user_id: int, name: str, dob: date) -> User:
        """Raises NotFoundError"""

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """Raises NotFoundError"""
