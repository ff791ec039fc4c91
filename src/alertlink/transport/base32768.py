"""Base32768: dense 15-bits-per-character text packing.

The input is read as a big-endian bit stream and cut into 15-bit groups. Each group
indexes a 32768-codepoint primary repertoire. The final group needs special treatment
so that the exact bit length can be recovered:

- 1 to 7 leftover bits are padded with 1-bits to 7 bits and mapped through the
  128-codepoint secondary repertoire.
- 8 to 14 leftover bits are padded with 1-bits to 15 bits and use the primary repertoire.

On decode, whatever bits remain after the last whole byte must all be 1-bits.

Both repertoires are built from blocks of 32 codepoints aligned on multiples of 32,
so a character's low five bits equal the low five bits of its index. Envelope bytes
start with ``[type id][0xFF]``, whose first 15-bit group is 127 or 255; both land on
the last slot of a block and therefore never have a zero low byte.
"""

from __future__ import annotations

from ..exceptions import InvalidCodepoint, TruncatedEncoding

BITS_PER_CHAR = 15
SECONDARY_BITS_PER_CHAR = 7
BITS_PER_BYTE = 8

# Inclusive codepoint ranges, in index order
PRIMARY_RANGES: tuple[tuple[int, int], ...] = (
    (0x04A0, 0x04BF),
    (0x0500, 0x051F),
    (0x0680, 0x06BF),
    (0x0760, 0x079F),
    (0x07C0, 0x07DF),
    (0x1000, 0x101F),
    (0x10A0, 0x10BF),
    (0x1100, 0x115F),
    (0x1180, 0x119F),
    (0x11E0, 0x123F),
    (0x1260, 0x127F),
    (0x12E0, 0x12FF),
    (0x1320, 0x133F),
    (0x13A0, 0x13DF),
    (0x1420, 0x165F),
    (0x16A0, 0x16DF),
    (0x1780, 0x179F),
    (0x1820, 0x185F),
    (0x18C0, 0x18DF),
    (0x1980, 0x199F),
    (0x19E0, 0x19FF),
    (0x1A20, 0x1A3F),
    (0x1BC0, 0x1BDF),
    (0x1C00, 0x1C1F),
    (0x1D00, 0x1D1F),
    (0x21E0, 0x21FF),
    (0x22C0, 0x22DF),
    (0x2340, 0x23DF),
    (0x2400, 0x241F),
    (0x2500, 0x275F),
    (0x2780, 0x27BF),
    (0x2800, 0x297F),
    (0x29A0, 0x29BF),
    (0x2A20, 0x2A5F),
    (0x2A80, 0x2ABF),
    (0x2AE0, 0x2B5F),
    (0x2C00, 0x2C1F),
    (0x2C80, 0x2CDF),
    (0x2D00, 0x2D1F),
    (0x2D40, 0x2D5F),
    (0x2EA0, 0x2EDF),
    (0x31C0, 0x31DF),
    (0x3400, 0x4D9F),
    (0x4DC0, 0x9FBF),
    (0xA000, 0xA47F),
    (0xA4A0, 0xA4BF),
    (0xA500, 0xA5FF),
    (0xA640, 0xA65F),
    (0xA6A0, 0xA6DF),
    (0xA700, 0xA75F),
    (0xA780, 0xA79F),
    (0xA840, 0xA85F),
)

SECONDARY_RANGES: tuple[tuple[int, int], ...] = (
    (0x0180, 0x019F),
    (0x0240, 0x029F),
)


def _build_repertoire(ranges: tuple[tuple[int, int], ...]) -> str:
    return "".join(chr(cp) for first, last in ranges for cp in range(first, last + 1))


PRIMARY_REPERTOIRE = _build_repertoire(PRIMARY_RANGES)
SECONDARY_REPERTOIRE = _build_repertoire(SECONDARY_RANGES)

_REPERTOIRES = {
    BITS_PER_CHAR: PRIMARY_REPERTOIRE,
    SECONDARY_BITS_PER_CHAR: SECONDARY_REPERTOIRE,
}

# character -> (bits carried, group value)
_LOOKUP: dict[str, tuple[int, int]] = {}
for _bits, _repertoire in _REPERTOIRES.items():
    for _index, _char in enumerate(_repertoire):
        _LOOKUP[_char] = (_bits, _index)


def encode(data: bytes) -> str:
    """Encode bytes as a base32768 string.

    Args:
        data: Bytes to encode (any length, including empty)

    Returns:
        Encoded string, ``ceil(8 * len(data) / 15)`` characters long

    Example:
        >>> encode(b"\\x00")
        'ڿ'
    """
    chars: list[str] = []
    group = 0
    num_bits = 0

    for byte in data:
        group = (group << BITS_PER_BYTE) | byte
        num_bits += BITS_PER_BYTE
        while num_bits >= BITS_PER_CHAR:
            num_bits -= BITS_PER_CHAR
            chars.append(PRIMARY_REPERTOIRE[group >> num_bits])
            group &= (1 << num_bits) - 1

    if num_bits:
        width = SECONDARY_BITS_PER_CHAR if num_bits <= SECONDARY_BITS_PER_CHAR else BITS_PER_CHAR
        pad_bits = width - num_bits
        group = (group << pad_bits) | ((1 << pad_bits) - 1)
        chars.append(_REPERTOIRES[width][group])

    return "".join(chars)


def decode(text: str) -> bytes:
    """Decode a base32768 string back to bytes.

    Args:
        text: Encoded string

    Returns:
        Original bytes

    Raises:
        InvalidCodepoint: If a character is outside both repertoires, or a secondary
            character appears anywhere but last
        TruncatedEncoding: If the leftover padding bits are not all 1-bits
    """
    result = bytearray()
    buffer = 0
    num_bits = 0
    last = len(text) - 1

    for position, char in enumerate(text):
        entry = _LOOKUP.get(char)
        if entry is None:
            raise InvalidCodepoint(
                f"Unrecognised base32768 character U+{ord(char):04X} at position {position}"
            )

        width, value = entry
        if width != BITS_PER_CHAR and position != last:
            raise InvalidCodepoint(
                f"Secondary base32768 character U+{ord(char):04X} found before end of input "
                f"at position {position}"
            )

        buffer = (buffer << width) | value
        num_bits += width
        while num_bits >= BITS_PER_BYTE:
            num_bits -= BITS_PER_BYTE
            result.append(buffer >> num_bits)
            buffer &= (1 << num_bits) - 1

    # Encoder always pads with 1-bits; zero leftover bits also satisfies this
    if buffer != (1 << num_bits) - 1:
        raise TruncatedEncoding(
            f"Final base32768 character does not resolve to whole bytes "
            f"({num_bits} leftover bits are not padding)"
        )

    return bytes(result)
