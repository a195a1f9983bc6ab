from pdao.infrastructure.persistence.sqlalchemy.database import Database
from pdao.infrastructure.persistence.sqlalchemy.models import Base, UserModel
from pdao.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "Database",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
