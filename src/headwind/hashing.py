"""Deterministic short hashes used to name generated classes."""

ALPHABET = "01234567890abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-"

SEED = 313
MULTIPLIER = 311
UINT32_MASK = 0xFFFFFFFF

# Five 6-bit fields, lowest bits first
FIELD_OFFSETS = (0, 6, 12, 18, 24)
FIELD_MASK = 0b111111


def hash_string(data: str) -> str:
    """Return a 5 character token for data. Same input, same token, in every process."""
    value = SEED
    for char in data:
        value = (value * MULTIPLIER + ord(char)) & UINT32_MASK

    return "".join(ALPHABET[(value >> offset) & FIELD_MASK] for offset in FIELD_OFFSETS)
