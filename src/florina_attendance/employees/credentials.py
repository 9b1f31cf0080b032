"""Stored credential classification and verification.

A stored credential is read back in one of three forms:

- absent: nothing stored, the employee still uses the system default password;
- legacy: a literal password written by older versions of the application;
- hashed: a self-describing digest, ``pbkdf2:...`` / ``scrypt:...`` from werkzeug
  or ``$2a$...`` bcrypt digests left by the previous front end.

`classify` is the only place that decides which form a stored value is in.
"""

from __future__ import annotations

import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Tuple

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_HASH_ITERATIONS, DEFAULT_PASSWORD


class Hasher(Protocol):
    def hash(self, plaintext: str, cost: Optional[int] = None) -> str:
        raise NotImplementedError

    def verify(self, plaintext: str, digest: str) -> bool:
        raise NotImplementedError

    def recognizes(self, stored: str) -> bool:
        """True when `stored` carries this hasher's scheme marker."""

        raise NotImplementedError


class WerkzeugHasher:
    """Password hashing backed by werkzeug.security."""

    MARKERS = ("pbkdf2:", "scrypt:")

    def __init__(self, iterations: int = DEFAULT_HASH_ITERATIONS):
        self._iterations = int(iterations)

    def hash(self, plaintext: str, cost: Optional[int] = None) -> str:
        return generate_password_hash(plaintext, method=f"pbkdf2:sha256:{int(cost or self._iterations)}")

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return check_password_hash(digest, plaintext)
        except (ValueError, TypeError):
            # e.g. a marker followed by a corrupted method or salt
            return False

    def recognizes(self, stored: str) -> bool:
        return stored.startswith(self.MARKERS)


class BcryptHasher:
    """Verifies bcrypt digests written by earlier versions of the application."""

    MARKERS = ("$2a$", "$2b$", "$2y$")

    def __init__(self, rounds: int = 10):
        self._rounds = int(rounds)

    def hash(self, plaintext: str, cost: Optional[int] = None) -> str:
        salt = bcrypt.gensalt(rounds=int(cost or self._rounds))
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("ascii")

    def verify(self, plaintext: str, digest: str) -> bool:
        # $2y$ (PHP) is the same algorithm as $2b$
        if digest.startswith("$2y$"):
            digest = "$2b$" + digest[4:]
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def recognizes(self, stored: str) -> bool:
        return stored.startswith(self.MARKERS)


# Digest formats that are still read but no longer written.
READ_ONLY_HASHERS: Tuple[Hasher, ...] = (BcryptHasher(),)


def _equals(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class StoredCredential(ABC):
    kind: str = ""

    @abstractmethod
    def verify(self, candidate: str) -> bool:
        raise NotImplementedError

    @property
    def needs_upgrade(self) -> bool:
        """Whether a successful login should replace this with a hashed digest."""

        return False


@dataclass(frozen=True)
class AbsentCredential(StoredCredential):
    default_password: str = field(default=DEFAULT_PASSWORD, repr=False)
    kind = "absent"

    def verify(self, candidate: str) -> bool:
        return candidate is not None and _equals(candidate, self.default_password)


@dataclass(frozen=True)
class LegacyCredential(StoredCredential):
    value: str = field(repr=False)
    kind = "legacy"

    def verify(self, candidate: str) -> bool:
        return candidate is not None and _equals(candidate, self.value)

    @property
    def needs_upgrade(self) -> bool:
        return True


@dataclass(frozen=True)
class HashedCredential(StoredCredential):
    digest: str = field(repr=False)
    hasher: Hasher = field(repr=False, compare=False)
    kind = "hashed"

    def verify(self, candidate: str) -> bool:
        if candidate is None:
            return False
        return self.hasher.verify(candidate, self.digest)


def classify(
    stored: Optional[str],
    hasher: Hasher,
    *,
    read_only: Sequence[Hasher] = READ_ONLY_HASHERS,
) -> StoredCredential:
    if not stored:
        return AbsentCredential()
    for candidate in (hasher, *read_only):
        if candidate.recognizes(stored):
            return HashedCredential(digest=stored, hasher=candidate)
    return LegacyCredential(value=stored)
