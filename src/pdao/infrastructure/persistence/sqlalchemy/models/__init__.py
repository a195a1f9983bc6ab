from pdao.infrastructure.persistence.sqlalchemy.models.base import Base, TimestampMixin
from pdao.infrastructure.persistence.sqlalchemy.models.user_model import (
    UNIQUE_FIELDS,
    UserModel,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UNIQUE_FIELDS",
    "UserModel",
]
