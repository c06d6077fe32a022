from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Salted, slow one-way password hash capability"""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a non-empty password. Two calls on the same input differ."""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a stored hash.

        Returns False (never raises) on malformed or corrupt hashes.
        """
        pass
