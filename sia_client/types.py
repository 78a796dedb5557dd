"""Sia domain values used as request parameters and response fields."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Annotated

from pydantic import Field

from sia_client.errors import InvalidIdentifierError

HEX_REGEX = re.compile(r"^[0-9a-fA-F]*$")

HASH_SIZE = 32
ADDRESS_CHECKSUM_SIZE = 6
ADDRESS_PREFIX = "addr:"
HASH_PREFIX = "h:"

# Amounts are hastings (10^-24 SC). walletd encodes them as decimal strings.
Currency = Annotated[int, Field(ge=0)]
# Heights and counts are plain JSON integers; anything else is shape drift.
Uint64 = Annotated[int, Field(strict=True, ge=0, lt=2**64)]


def _strip_prefix(value: str, prefix: str) -> str:
    return value[len(prefix):] if value.startswith(prefix) else value


def _decode_hex(value: str, *, size: int, kind: str) -> bytes:
    if len(value) != size * 2 or not HEX_REGEX.fullmatch(value):
        raise InvalidIdentifierError(f"Invalid {kind}: expected {size * 2} hex characters.")
    return bytes.fromhex(value)


def address_checksum(hash_bytes: bytes) -> bytes:
    """First six bytes of blake2b-256 over the address hash."""
    return hashlib.blake2b(hash_bytes, digest_size=32).digest()[:ADDRESS_CHECKSUM_SIZE]


@dataclass(frozen=True)
class Hash256:
    """A 32-byte identifier such as a transaction or block id."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != HASH_SIZE:
            raise InvalidIdentifierError(f"Invalid hash: expected {HASH_SIZE} bytes.")

    @classmethod
    def parse(cls, text: str) -> "Hash256":
        raw = _strip_prefix(text.strip(), HASH_PREFIX)
        return cls(_decode_hex(raw, size=HASH_SIZE, kind="hash"))

    def __str__(self) -> str:
        return self.value.hex()


@dataclass(frozen=True)
class Address:
    """
    An unlock-hash address.

    The text form is the 32-byte hash followed by a 6-byte checksum, hex
    encoded. Older nodes prefix it with ``addr:``; both forms parse.
    """

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != HASH_SIZE:
            raise InvalidIdentifierError(f"Invalid address: expected {HASH_SIZE} bytes.")

    @classmethod
    def parse(cls, text: str) -> "Address":
        raw = _strip_prefix(text.strip(), ADDRESS_PREFIX)
        decoded = _decode_hex(raw, size=HASH_SIZE + ADDRESS_CHECKSUM_SIZE, kind="address")
        hash_bytes, checksum = decoded[:HASH_SIZE], decoded[HASH_SIZE:]
        if address_checksum(hash_bytes) != checksum:
            raise InvalidIdentifierError("Invalid address: checksum mismatch.")
        return cls(hash_bytes)

    def __str__(self) -> str:
        return (self.value + address_checksum(self.value)).hex()
