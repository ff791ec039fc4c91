"""Base65536: 16-bits-per-character text packing.

Each byte pair ``(b1, b2)`` becomes the single codepoint ``BLOCK_STARTS[b2] + b1``.
A trailing odd byte ``b1`` becomes ``PADDING_BLOCK_START + b1``. Every block is 256
codepoints long and 256-aligned, so the low byte of a character is always the first
byte of the pair it carries.
"""

from __future__ import annotations

from ..exceptions import InvalidCodepoint

BLOCK_SIZE = 256
PADDING_BLOCK_START = 0x1500

# (first block start, last block start), stepping by BLOCK_SIZE
_BLOCK_START_RANGES: tuple[tuple[int, int], ...] = (
    (0x03400, 0x04C00),  # CJK Unified Ideographs Extension A
    (0x04E00, 0x09E00),  # CJK Unified Ideographs
    (0x0A100, 0x0A300),  # Yi Syllables
    (0x0A500, 0x0A500),  # Vai
    (0x10600, 0x10600),  # Linear A
    (0x12000, 0x12200),  # Cuneiform
    (0x13000, 0x13300),  # Egyptian Hieroglyphs
    (0x14400, 0x14500),  # Anatolian Hieroglyphs
    (0x16800, 0x16900),  # Bamum Supplement
    (0x20000, 0x28500),  # CJK Unified Ideographs Extension B
)

BLOCK_STARTS: tuple[int, ...] = tuple(
    start
    for first, last in _BLOCK_START_RANGES
    for start in range(first, last + 1, BLOCK_SIZE)
)

# codepoint >> 8 -> second byte of the pair
_BLOCK_LOOKUP: dict[int, int] = {start >> 8: b2 for b2, start in enumerate(BLOCK_STARTS)}
_PADDING_BLOCK = PADDING_BLOCK_START >> 8


def encode(data: bytes) -> str:
    """Encode bytes as a base65536 string.

    Args:
        data: Bytes to encode (any length, including empty)

    Returns:
        Encoded string, ``ceil(len(data) / 2)`` characters long

    Example:
        >>> encode(b"\\x00\\x00")
        '㐀'
    """
    chars: list[str] = []
    for i in range(0, len(data), 2):
        b1 = data[i]
        if i + 1 < len(data):
            chars.append(chr(BLOCK_STARTS[data[i + 1]] + b1))
        else:
            chars.append(chr(PADDING_BLOCK_START + b1))
    return "".join(chars)


def decode(text: str) -> bytes:
    """Decode a base65536 string back to bytes.

    Args:
        text: Encoded string

    Returns:
        Original bytes

    Raises:
        InvalidCodepoint: If a character is outside every block, or a padding
            character is followed by more input
    """
    result = bytearray()
    last = len(text) - 1

    for position, char in enumerate(text):
        codepoint = ord(char)
        block = codepoint >> 8
        b1 = codepoint & 0xFF

        if block == _PADDING_BLOCK:
            if position != last:
                raise InvalidCodepoint(
                    f"Base65536 sequence continued after final byte at position {position}"
                )
            result.append(b1)
            continue

        b2 = _BLOCK_LOOKUP.get(block)
        if b2 is None:
            raise InvalidCodepoint(
                f"Unrecognised base65536 character U+{codepoint:04X} at position {position}"
            )
        result.append(b1)
        result.append(b2)

    return bytes(result)
