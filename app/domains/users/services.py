"""
Бизнес-логика работы с пользователями.

Сервис отвечает за:
- проверку входных данных до обращения к хранилищу;
- вычисление возраста по дате рождения (возраст никогда не сохраняется);
- расчёт пагинации.

Состояния между запросами сервис не хранит. Все настройки (размер страницы,
источник текущей даты) передаются в конструктор.
"""

import logging
import re
from datetime import date, datetime
from typing import Callable

from app.domains.users.entities import User
from app.domains.users.exceptions import ValidationError
from app.domains.users.repository import UserRepository
from app.domains.users.schemas import UserListResponse, UserResponse

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_dob(value: str) -> date:
    """Разбор даты рождения строго в формате YYYY-MM-DD"""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError("invalid date format, use YYYY-MM-DD")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise ValidationError("invalid date format, use YYYY-MM-DD") from e


def format_dob(value: date) -> str:
    return value.isoformat()


class UserService:
    """Сервис для работы с пользователями"""

    def __init__(
        self,
        repository: UserRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        today: Callable[[], date] = date.today
    ):
        self.repository = repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self._today = today

    def _validate(self, name: str, dob: str) -> date:
        if not name:
            raise ValidationError("name cannot be empty")
        return parse_dob(dob)

    async def create_user(self, name: str, dob: str) -> User:
        """Создание пользователя"""
        parsed = self._validate(name, dob)
        return await self.repository.create(name, parsed)

    async def get_user_by_id(self, user_id: int) -> User:
        """Получение пользователя по id"""
        return await self.repository.get_by_id(user_id)

    async def list_users(self, page: int, limit: int) -> UserListResponse:
        """Постраничный список пользователей с возрастом"""
        if page < 1:
            page = 1
        if limit < 1:
            limit = self.default_page_size
        if limit > self.max_page_size:
            limit = self.max_page_size

        offset = (page - 1) * limit

        # count и list: два независимых запроса без общей транзакции
        total = await self.repository.count()
        users = await self.repository.list(limit, offset)

        total_pages = (total + limit - 1) // limit

        logger.debug(f"Listed {len(users)} users (page={page}, limit={limit}, total={total})")

        return UserListResponse(
            data=[self.to_response(user, with_age=True) for user in users],
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages
        )

    async def update_user(self, user_id: int, name: str, dob: str) -> User:
        """Полная замена имени и даты рождения"""
        parsed = self._validate(name, dob)
        return await self.repository.update(user_id, name, parsed)

    async def delete_user(self, user_id: int) -> None:
        """Удаление пользователя"""
        await self.repository.delete(user_id)

    def calculate_age(self, dob: date) -> int:
        """Полных лет на сегодня; в день рождения возраст уже увеличен"""
        today = self._today()
        age = today.year - dob.year
        if (today.month, today.day) < (dob.month, dob.day):
            age -= 1
        return age

    def to_response(self, user: User, with_age: bool = False) -> UserResponse:
        return UserResponse(
            id=user.id,
            name=user.name,
            dob=format_dob(user.dob),
            age=self.calculate_age(user.dob) if with_age else None
        )
