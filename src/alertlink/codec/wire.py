"""Protobuf wire-format writing and reading utilities.

This module provides low-level varint and length-delimited primitives for the
proto3 wire encoding. Multi-byte integers are little-endian base-128 varints.
"""

from __future__ import annotations

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LEN = 2
WIRE_START_GROUP = 3
WIRE_END_GROUP = 4
WIRE_FIXED32 = 5

MAX_VARINT_BYTES = 10
MAX_FIELD_NUMBER = (1 << 29) - 1
UINT64_MASK = (1 << 64) - 1


class WireWriter:
    """Writes protobuf wire primitives into a byte buffer.

    Example:
        >>> writer = WireWriter()
        >>> writer.write_varint_field(1, 150)
        >>> writer.to_bytes()
        b'\\x08\\x96\\x01'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_varint(self, value: int) -> None:
        """Write an unsigned varint.

        Args:
            value: Value to write (0 to 2**64 - 1)

        Raises:
            ValueError: If value is negative or wider than 64 bits
        """
        if value < 0:
            raise ValueError(f"write_varint requires non-negative value, got {value}")
        if value > UINT64_MASK:
            raise ValueError(f"Value {value} does not fit in 64 bits")

        while value >= 0x80:
            self._buffer.append((value & 0x7F) | 0x80)
            value >>= 7
        self._buffer.append(value)

    def write_tag(self, number: int, wire_type: int) -> None:
        """Write a field key (field number and wire type)."""
        if not 1 <= number <= MAX_FIELD_NUMBER:
            raise ValueError(f"Field number must be 1-{MAX_FIELD_NUMBER}, got {number}")
        self.write_varint((number << 3) | wire_type)

    def write_varint_field(self, number: int, value: int) -> None:
        """Write a varint field; negative values are sign-extended to 64 bits."""
        self.write_tag(number, WIRE_VARINT)
        self.write_varint(value & UINT64_MASK)

    def write_length_delimited(self, number: int, payload: bytes) -> None:
        """Write a length-delimited field (sub-message or packed repeated)."""
        self.write_tag(number, WIRE_LEN)
        self.write_varint(len(payload))
        self._buffer.extend(payload)

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the written bytes."""
        return bytes(self._buffer)


class WireReader:
    """Reads protobuf wire primitives from a byte buffer.

    Example:
        >>> reader = WireReader(b"\\x08\\x96\\x01")
        >>> reader.read_tag()
        (1, 0)
        >>> reader.read_varint()
        150
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a reader over the given data.

        Args:
            data: Byte buffer to read
        """
        self._data = bytes(data)
        self._position = 0

    def at_end(self) -> bool:
        """Return True when every byte has been consumed."""
        return self._position >= len(self._data)

    def read_varint(self) -> int:
        """Read an unsigned varint.

        Returns:
            Decoded value (up to 70 bits; callers truncate to their field width)

        Raises:
            IndexError: If the buffer ends inside the varint
            ValueError: If the varint is longer than 10 bytes
        """
        value = 0
        for i in range(MAX_VARINT_BYTES):
            if self._position >= len(self._data):
                raise IndexError("Attempted to read past end of buffer inside varint")
            byte = self._data[self._position]
            self._position += 1
            value |= (byte & 0x7F) << (7 * i)
            if not byte & 0x80:
                return value
        raise ValueError(f"Varint longer than {MAX_VARINT_BYTES} bytes")

    def read_tag(self) -> tuple[int, int]:
        """Read a field key.

        Returns:
            Tuple of (field number, wire type)

        Raises:
            ValueError: If the field number is 0 or out of range
        """
        key = self.read_varint()
        number = key >> 3
        wire_type = key & 0x07
        if not 1 <= number <= MAX_FIELD_NUMBER:
            raise ValueError(f"Invalid field number {number}")
        return number, wire_type

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Raises:
            IndexError: If not enough bytes are available
        """
        if self._position + num_bytes > len(self._data):
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {self.bytes_remaining()}"
            )
        result = self._data[self._position : self._position + num_bytes]
        self._position += num_bytes
        return result

    def read_length_delimited(self) -> bytes:
        """Read a length prefix and the bytes it covers."""
        return self.read_bytes(self.read_varint())

    def skip_field(self, wire_type: int) -> None:
        """Skip the value of an unknown field.

        Raises:
            ValueError: For group wire types and undefined wire types
        """
        if wire_type == WIRE_VARINT:
            self.read_varint()
        elif wire_type == WIRE_FIXED64:
            self.read_bytes(8)
        elif wire_type == WIRE_LEN:
            self.read_length_delimited()
        elif wire_type == WIRE_FIXED32:
            self.read_bytes(4)
        else:
            raise ValueError(f"Unsupported wire type {wire_type}")

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position
