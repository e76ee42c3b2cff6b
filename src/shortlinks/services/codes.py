from __future__ import annotations

import logging
import secrets
import string
from typing import Callable, Protocol

from shortlinks.core.errors import GenerationError, StoreError

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase + string.digits
CODE_LENGTH = 7
MAX_ATTEMPTS = 10


class ExistenceChecker(Protocol):
    def exists(self, code: str) -> bool: ...


def random_code(length: int = CODE_LENGTH, alphabet: str = ALPHABET) -> str:
    # secrets.choice draws through randbelow, so every character is uniform
    return "".join(secrets.choice(alphabet) for _ in range(length))


def is_valid_code(code: str) -> bool:
    return len(code) == CODE_LENGTH and all(c in ALPHABET for c in code)


class CodeGenerator:
    """
    Produces short codes that were free at the time they were checked.

    Algorithm:
    - sample CODE_LENGTH characters from ALPHABET
    - ask the store whether the code is taken
    - free -> return it; taken -> sample again
    - a store failure aborts at once (no retry)
    - give up after max_attempts collisions

    The store's unique constraint still has the final word: two requests
    can draw the same free code before either inserts.
    """

    def __init__(
        self,
        store: ExistenceChecker,
        max_attempts: int = MAX_ATTEMPTS,
        sampler: Callable[[], str] = random_code,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.max_attempts = max_attempts
        self._sampler = sampler

    def generate(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            code = self._sampler()

            try:
                taken = self.store.exists(code)
            except StoreError as exc:
                raise GenerationError(f"existence check failed on attempt {attempt}") from exc

            if not taken:
                return code

            logger.debug("Short code collision on attempt %d/%d", attempt, self.max_attempts)

        logger.error("No free short code after %d attempts", self.max_attempts)
        raise GenerationError(f"failed to generate unique code after {self.max_attempts} attempts")
