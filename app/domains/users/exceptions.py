class UserServiceError(Exception):
    """Базовая ошибка домена пользователей"""


class ValidationError(UserServiceError, ValueError):
    """Некорректные данные от клиента (400)"""


class NotFoundError(UserServiceError, LookupError):
    """Пользователь не найден (404)"""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class StoreError(UserServiceError):
    """Ошибка хранилища: соединение, ограничения, прочее (500)"""
