"""
Opaque byte identifiers.

Peers and blocks are identified by raw byte strings whose structure this
package never inspects. On-chain settings carry them as hex text.
"""

from __future__ import annotations

import binascii
from typing import Any, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


class OpaqueBytes(bytes):
    """
    A base class for opaque identifiers that inherits from `bytes`.

    Instances compare and hash like the underlying bytes.
    """

    @classmethod
    def from_hex(cls, text: str) -> Self:
        """
        Decode a hex string into an identifier.

        Decoding is strict: the text must have even length and contain only
        hex digits. A `0x` prefix and embedded whitespace are rejected.

        Raises:
            ValueError: If `text` is not valid hex.
        """
        try:
            return cls(binascii.unhexlify(text))
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"{text!r} is not valid hex: {e}") from e

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. Instances of the class are accepted as is.
        2. Raw bytes are wrapped.
        3. Hex strings are decoded with `from_hex`.

        Serialization (in both Python and JSON modes) emits the hex string.
        """
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.chain_schema(
                    [
                        core_schema.bytes_schema(strict=True),
                        core_schema.no_info_plain_validator_function(cls),
                    ]
                ),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(strict=True),
                        core_schema.no_info_plain_validator_function(cls.from_hex),
                    ]
                ),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.hex()),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        return f"{type(self).__name__}({self.hex()})"

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class PeerId(OpaqueBytes):
    """Identifier of a consensus participant."""


class BlockId(OpaqueBytes):
    """Identifier of a block, used as the reference point for reading settings."""
