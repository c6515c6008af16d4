"""
Picks the code generator named by `settings.short_code_strategy`.
"""

from enum import Enum
from typing import Union

from linkhub_app.services.short_code_strategies import (
    ShortCodeStrategy,
    RandomShortCodeStrategy,
    Base62ShortCodeStrategy
)
from linkhub_app.config import settings


class ShortCodeStrategyType(Enum):
    RANDOM = "random"
    BASE62 = "base62"


def _build_random() -> ShortCodeStrategy:
    return RandomShortCodeStrategy(
        length=settings.short_code_length,
        max_attempts=settings.short_code_max_attempts
    )


def _build_base62() -> ShortCodeStrategy:
    return Base62ShortCodeStrategy(
        salt=settings.short_code_salt,
        length=settings.short_code_length,
        max_attempts=settings.short_code_max_attempts
    )


class ShortCodeFactory:

    _builders = {
        ShortCodeStrategyType.RANDOM: _build_random,
        ShortCodeStrategyType.BASE62: _build_base62,
    }
    # One generator per kind; every store in the process shares it
    _instances = {}

    @classmethod
    def create_strategy(
        cls,
        strategy_type: Union[ShortCodeStrategyType, str, None] = None
    ) -> ShortCodeStrategy:
        """
        Generator for `strategy_type` (a member or its value such as "base62").
        Defaults to the configured one.

        Raises:
            ValueError: strategy_type names no known generator
        """
        name = strategy_type or settings.short_code_strategy
        try:
            kind = ShortCodeStrategyType(name)
        except ValueError:
            known = ", ".join(member.value for member in ShortCodeStrategyType)
            raise ValueError(f"Unknown short code strategy {name!r}, expected one of: {known}") from None

        if kind not in cls._instances:
            cls._instances[kind] = cls._builders[kind]()
        return cls._instances[kind]
