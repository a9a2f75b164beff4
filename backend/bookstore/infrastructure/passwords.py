"""Password Hasher — bcrypt digests with a fixed work factor.

Invariants:
    - Plaintext passwords never leave this module and are never logged
    - Digests are bcrypt strings ($2b$<cost>$...), stored as text
    - verify() compares in constant time (bcrypt.checkpw)
    - Any backend failure surfaces as HashingError (500), never as a bool

Design Decisions:
    - bcrypt directly over passlib: passlib is the usual wrapper but is unmaintained
      and fails on current bcrypt releases
    - *_async wrappers push the CPU-bound work to a worker thread so one login
      cannot stall the event loop for every other request
"""

import asyncio
import logging

import bcrypt

from bookstore.core.errors import HashingError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """One-way adaptive hash + verify."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            digest = bcrypt.hashpw(
                plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds),
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Password hashing failed: {type(e).__name__}")
            raise HashingError() from e
        return digest.decode("ascii")

    def verify(self, digest: str, plaintext: str) -> bool:
        try:
            return bcrypt.checkpw(
                plaintext.encode("utf-8"), digest.encode("ascii"),
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Password verification failed: {type(e).__name__}")
            raise HashingError() from e

    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, digest: str, plaintext: str) -> bool:
        return await asyncio.to_thread(self.verify, digest, plaintext)
