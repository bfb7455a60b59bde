from sqlalchemy import Column, Date, String

from app.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    dob = Column(Date, nullable=False)
