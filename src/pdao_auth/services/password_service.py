"""bcrypt password hashing for PDAO accounts."""

import bcrypt

from pdao_contracts.constants import PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH

from pdao_auth.exceptions import WeakPasswordError

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHashingService:
    """Hash and check account passwords.

    Passwords are accepted between 8 and 100 characters. Anything past
    bcrypt's 72-byte window does not contribute to the hash, so two long
    passwords sharing those first bytes verify against each other.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("SecurePass123")
    >>> service.verify("SecurePass123", stored)
    True
    """

    MIN_LENGTH = PASSWORD_MIN_LENGTH
    MAX_LENGTH = PASSWORD_MAX_LENGTH
    DEFAULT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Parameters
        ----------
        rounds
            bcrypt work factor; tests use 4 to stay fast
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of ``password``.

        Raises
        ------
        WeakPasswordError
            If the password is empty or outside the length bounds
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_secret(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a stored hash; a malformed hash never matches."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(_secret(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str) -> None:
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)
        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)
        if len(password) > self.MAX_LENGTH:
            msg = f"Password cannot exceed {self.MAX_LENGTH} characters"
            raise WeakPasswordError(msg)
