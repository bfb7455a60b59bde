from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass
class User:
    """Сущность пользователя. Возраст не хранится, а вычисляется при чтении"""
    id: int
    name: str
    dob: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"User(id={self.id}, name={self.name!r}, dob={self.dob.isoformat()})"
