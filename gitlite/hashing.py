import binascii
import hashlib
import re

from gitlite.errors import InvalidAddress

__all__ = ["create_hash", "to_binary", "to_hex", "validate_address"]

ADDRESS_LENGTH = 40
RAW_ADDRESS_LENGTH = 20

ADDRESS_REGEX = re.compile(rf"[0-9a-fA-F]{{{ADDRESS_LENGTH}}}")


def create_hash(data: str | bytes, *, hasher=hashlib.sha1) -> str:
    if isinstance(data, str):
        data = data.encode()
    hash_object = hasher(data)
    hash_value = hash_object.hexdigest()
    return hash_value


def validate_address(address: str) -> str:
    if not isinstance(address, str) or not ADDRESS_REGEX.fullmatch(address):
        raise InvalidAddress(f"Not a valid object name: {address!r}")
    return address.lower()


def to_binary(address: str) -> bytes:
    return binascii.unhexlify(validate_address(address))


def to_hex(raw_hash: bytes) -> str:
    if len(raw_hash) != RAW_ADDRESS_LENGTH:
        raise InvalidAddress(
            f"raw object name must be {RAW_ADDRESS_LENGTH} bytes, got {len(raw_hash)}"
        )
    return binascii.hexlify(raw_hash).decode()
