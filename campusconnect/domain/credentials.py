"""
Credential primitives - password hashing and one-time codes.

Password hashing is always an explicit call made by a service before
the repository is touched; the store never hashes on save.
"""

import secrets

import bcrypt

# bcrypt only considers the first 72 bytes; newer releases raise instead
# of truncating silently.
_BCRYPT_MAX_BYTES = 72


class CredentialHasher:
    """
    bcrypt password hasher with a configurable work factor.

    check_unknown() burns the same bcrypt time as check() for callers
    that have no stored hash, so a missing account cannot be told apart
    from a wrong password by response time.
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        self._dummy_hash = self.hash("dummy_password_for_timing_safety")

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds)).decode()

    def check(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(_encode(password), password_hash.encode())

    def check_unknown(self, password: str) -> bool:
        """Run a comparison against a dummy hash; always False."""
        bcrypt.checkpw(_encode(password), self._dummy_hash.encode())
        return False


def _encode(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


class CodeGenerator:
    """
    Cryptographically secure fixed-length numeric codes.

    Codes are strings to preserve leading zeros.
    """

    def __init__(self, length: int = 6) -> None:
        self.length = length

    def generate(self) -> str:
        return "".join(secrets.choice("0123456789") for _ in range(self.length))
