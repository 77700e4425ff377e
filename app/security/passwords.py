"""Salted password hashing (bcrypt)."""

import bcrypt


class PasswordHasher:
    """bcrypt hash and timing-safe verification. Cost factor comes from settings."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        # Verified against when the username is unknown, so that path costs one bcrypt check too.
        self._dummy_hash = self.hash("not-a-real-password")

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(
                password=password.encode("utf-8"),
                hashed_password=hashed_password.encode("utf-8"),
            )
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False

    def burn(self, password: str) -> None:
        """Spend one verification's worth of time without a stored hash."""
        self.verify(password, self._dummy_hash)
