"""Password hashing service.

New hashes use bcrypt. Hashes tagged ``pbkdf2_sha256`` (imported from older
stores) can still be verified, so accounts are not locked out while they
migrate.
"""

import base64
import hashlib
import hmac
import logging
import os

import bcrypt

from warden_identity.exceptions import InvalidArgumentError, WeakPasswordError

logger = logging.getLogger(__name__)


class PasswordHashingService:
    """Service for salted, algorithm-tagged password hashing and verification.

    Every call to ``hash`` embeds a fresh random salt in its result, so the
    same password never hashes to the same string twice. ``verify`` reads
    the salt back out of the stored hash.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    BCRYPT = "bcrypt"
    PBKDF2_SHA256 = "pbkdf2_sha256"
    DEFAULT_ALGORITHM = BCRYPT

    # Password requirements
    MIN_LENGTH = 8
    MAX_BYTES = 72  # bcrypt ignores input beyond 72 bytes

    PBKDF2_ITERATIONS = 600_000
    PBKDF2_SALT_BYTES = 16

    def __init__(
        self,
        rounds: int = 12,
        min_length: int = MIN_LENGTH,
        pbkdf2_iterations: int = PBKDF2_ITERATIONS,
    ):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
        min_length
            Minimum number of characters accepted for new passwords.
        pbkdf2_iterations
            Iteration count for newly produced ``pbkdf2_sha256`` hashes.
        """
        self._rounds = rounds
        self._min_length = min_length
        self._pbkdf2_iterations = pbkdf2_iterations

    @property
    def default_algorithm(self) -> str:
        return self.DEFAULT_ALGORITHM

    def hash(self, password: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash
        algorithm
            Algorithm identifier, ``"bcrypt"`` (default) or ``"pbkdf2_sha256"``

        Returns
        -------
        The encoded hash, salt included

        Raises
        ------
        InvalidArgumentError
            If the password is empty or the algorithm is unknown
        """
        if not password:
            msg = "Password cannot be empty"
            raise InvalidArgumentError(msg, argument="password")

        if algorithm == self.BCRYPT:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
            return hashed.decode("utf-8")

        if algorithm == self.PBKDF2_SHA256:
            return self._hash_pbkdf2(password, os.urandom(self.PBKDF2_SALT_BYTES))

        msg = f"Unsupported password hash algorithm: {algorithm}"
        raise InvalidArgumentError(msg, argument="algorithm")

    def hash_with_algorithm(self, password: str) -> tuple[str, str]:
        """Hash with the default algorithm; returns ``(hash, algorithm_id)``."""
        return self.hash(password, self.DEFAULT_ALGORITHM), self.DEFAULT_ALGORITHM

    def verify(
        self,
        password: str,
        password_hash: str | None,
        algorithm: str | None = DEFAULT_ALGORITHM,
    ) -> bool:
        """Verify a password against a stored hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The stored hash to verify against
        algorithm
            Algorithm identifier the hash was produced with

        Returns
        -------
        True if password matches, False otherwise (including malformed
        hashes and unknown algorithms)
        """
        if not password or not password_hash:
            return False

        if algorithm == self.BCRYPT:
            try:
                return bcrypt.checkpw(
                    password.encode("utf-8"),
                    password_hash.encode("utf-8"),
                )
            except (ValueError, TypeError):
                # Invalid hash format or oversized input
                return False

        if algorithm == self.PBKDF2_SHA256:
            return self._verify_pbkdf2(password, password_hash)

        logger.warning(
            "Cannot verify password hash with unknown algorithm: %s",
            algorithm,
        )
        return False

    def validate_strength(self, password: str) -> None:
        """Validate that a new password meets strength requirements.

        Current requirements:
        - Not empty
        - At least ``min_length`` characters
        - At most 72 bytes once UTF-8 encoded

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self._min_length:
            msg = f"Password must be at least {self._min_length} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str, algorithm: str | None) -> bool:
        """Check if a password hash should be regenerated.

        True for hashes made with a non-default algorithm, and for bcrypt
        hashes whose work factor differs from the configured rounds.
        """
        if algorithm != self.DEFAULT_ALGORITHM:
            return True
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, IndexError):
            pass
        return True

    def _hash_pbkdf2(self, password: str, salt: bytes) -> str:
        iterations = self._pbkdf2_iterations
        key = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
        salt_b64 = base64.b64encode(salt).decode("ascii")
        key_b64 = base64.b64encode(key).decode("ascii")
        return f"{self.PBKDF2_SHA256}${iterations}${salt_b64}${key_b64}"

    def _verify_pbkdf2(self, password: str, password_hash: str) -> bool:
        try:
            tag, iterations, salt_b64, key_b64 = password_hash.split("$")
            if tag != self.PBKDF2_SHA256:
                return False
            salt = base64.b64decode(salt_b64, validate=True)
            expected = base64.b64decode(key_b64, validate=True)
            rounds = int(iterations)
        except ValueError:
            return False

        actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
        return hmac.compare_digest(actual, expected)
