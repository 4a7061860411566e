"""Unsigned integer type for counts read from on-chain settings."""

from __future__ import annotations

import re
from typing import Any, ClassVar, Final, SupportsInt

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

_DECIMAL: Final = re.compile(r"\+?[0-9]+")
"""Unsigned decimal literal: an optional plus sign followed by ASCII digits."""


class BaseUint(int):
    """A base class for custom unsigned integer types that inherits from `int`."""

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Create and validate a new Uint instance.

        Raises:
            OverflowError: If `value` is outside the allowed range [0, 2**BITS - 1].
        """
        int_value = int(value)
        if not (0 <= int_value < (2**cls.BITS)):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse a setting value written as an unsigned decimal integer.

        Stricter than `int()`: surrounding whitespace, digit separators and
        negative signs are all rejected.

        Raises:
            ValueError: If `text` is not an unsigned decimal literal.
            OverflowError: If the number does not fit in `BITS` bits.
        """
        if not _DECIMAL.fullmatch(text):
            raise ValueError(f"invalid digit found in {text!r}")
        return cls(int(text))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BaseUint:
            """Pydantic validation function that calls the class constructor."""
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{cls.__name__} requires an int, got {type(value).__name__}")
            try:
                return cls(value)
            except OverflowError as e:
                raise ValueError(str(e)) from e

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    def __repr__(self) -> str:
        """Return a string representation of the integer."""
        return f"{type(self).__name__}({int(self)})"


class Uint64(BaseUint):
    """A 64-bit unsigned integer."""

    BITS = 64
