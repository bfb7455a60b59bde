from app.db.repositories.user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyUserRepository"
]
