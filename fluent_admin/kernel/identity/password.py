"""
Password hashing utilities using bcrypt.
"""

import bcrypt

# bcrypt cost factor; hashes made with another cost still verify
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashing with constant-time verification."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string ($2b$...)
        """
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Check a password against a stored hash.

        A malformed stored hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
        except ValueError:
            return False

    def burn(self, plain_password: str) -> None:
        """
        Spend one verification's worth of work without a real hash.

        Called when a username does not exist so the response time matches
        a wrong-password attempt.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=self.rounds))
        bcrypt.checkpw(_encode(plain_password), self._dummy_hash)

