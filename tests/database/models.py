"""Entities shared by the database tests."""

from ormkit.database import Model, column


class User(Model):
    __tablename__ = "users"

    id: int | None = column(None, primary_key=True, auto_increment=True)
    name: str
    email: str
    age: int | None = None
    score: float | None = None
    is_active: bool = True
