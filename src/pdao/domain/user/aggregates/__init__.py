from pdao.domain.user.aggregates.user import User

__all__ = ["User"]
