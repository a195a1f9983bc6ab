from pdao.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
    duplicate_field,
)

__all__ = [
    "UserRepositorySQLAlchemy",
    "duplicate_field",
]
