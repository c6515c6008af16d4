"""
Short code generation strategies for LinkHub.
Uses Strategy Pattern to allow different generation algorithms.
"""

import string
import random
from abc import ABC, abstractmethod
from typing import Callable

from linkhub_app.exceptions import ExhaustedError


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    def __init__(self, length: int = 6, max_attempts: int = 10):
        self.length = length
        self.max_attempts = max_attempts

    def generate(self, sequence: int, is_taken: Callable[[str], bool]) -> str:
        """
        Generate a short code that is not taken yet.

        Args:
            sequence: The id assigned to the new mapping
            is_taken: Uniqueness check, called with each candidate

        Returns:
            A fixed-length code for which is_taken returned False

        Raises:
            ExhaustedError: If every attempt produced a taken code
        """
        for attempt in range(self.max_attempts):
            code = self._candidate(sequence, attempt)
            if not is_taken(code):
                return code

        raise ExhaustedError(
            f"Could not generate unique short code after {self.max_attempts} attempts"
        )

    @abstractmethod
    def _candidate(self, sequence: int, attempt: int) -> str:
        """Produce the candidate for one attempt"""


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation strategy.
    Draws every character uniformly from the 62-symbol alphabet.

    Pros: Simple, unpredictable
    Cons: Needs a uniqueness check per attempt
    """

    def __init__(self, length: int = 6, max_attempts: int = 10):
        super().__init__(length=length, max_attempts=max_attempts)
        self._random = random.SystemRandom()

    def _candidate(self, sequence: int, attempt: int) -> str:
        return ''.join(self._random.choice(ALPHABET) for _ in range(self.length))


class Base62ShortCodeStrategy(ShortCodeStrategy):
    """
    Base62 encoding strategy with ID obfuscation.
    Converts the mapping id plus a salt to Base62, left-padded to a fixed width.

    Pros: No collisions between generated codes, no randomness
    Cons: Predictable if salt is known; can still hit a custom alias,
          in which case the next number is tried
    """

    BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def __init__(self, salt: int = 1000, length: int = 6, max_attempts: int = 10):
        super().__init__(length=length, max_attempts=max_attempts)
        self.salt = salt

    def _candidate(self, sequence: int, attempt: int) -> str:
        encoded = self._base62_encode(sequence + self.salt + attempt)

        # Truncating would cause duplicates
        if len(encoded) > self.length:
            raise ExhaustedError(
                f"Generated code '{encoded}' exceeds length {self.length}. "
                f"Sequence: {sequence}, salt: {self.salt}."
            )

        return encoded.rjust(self.length, self.BASE62_CHARS[0])

    def _base62_encode(self, number: int) -> str:
        """
        Convert integer to Base62 string.

        Base62 uses: 0-9 (10) + a-z (26) + A-Z (26) = 62 characters
        """
        if number == 0:
            return self.BASE62_CHARS[0]

        result = ""
        while number > 0:
            result = self.BASE62_CHARS[number % 62] + result
            number //= 62

        return result
