#!/usr/bin/env python3
"""Basic usage example for alertlink.

This example demonstrates:
1. Building an earthquake report with Pydantic
2. Encoding it as a shareable URL in both text schemes
3. Decoding the URL and checking its authentication tag
4. Reconstructing the CLI command for a decoded record
"""

from __future__ import annotations

from alertlink import (
    Epicenter,
    QuakePrefectureData,
    Scheme,
    decode_token,
    encode_record,
    encoded_length,
    envelope_size,
    serialize,
)

PREFIX = "https://example.org/a/"
KEY = "shared-secret"


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("alertlink Basic Usage Example")
    print("=" * 60)
    print()

    # Create a record
    print("1. Creating an earthquake report...")
    record = QuakePrefectureData(
        time=1700000000,
        epicenter=Epicenter.from_degrees(35.6, 139.7),
        one=[130000, 140000],
        three=[270000],
    )
    print(f"   Epicenter: {record.epicenter.lat}, {record.epicenter.lon}")  # type: ignore[union-attr]
    print(f"   Intensity 1 regions: {list(record.one)}")
    print(f"   Intensity 3 regions: {list(record.three)}")
    print()

    # Body size
    print("2. Serializing the body...")
    body = serialize(record)
    print(f"   Body size: {len(body)} bytes")
    print(f"   Hex: {body.hex()}")
    print()

    # Encode in both schemes
    print("3. Encoding as shareable URLs...")
    urls = {}
    for scheme in Scheme:
        urls[scheme] = encode_record(record, scheme, key=KEY, prefix=PREFIX)
        print(
            f"   {scheme.value}: {envelope_size(record, scheme)} bytes -> "
            f"{encoded_length(record, scheme)} characters"
        )
        print(f"   {urls[scheme]}")
    print()

    # Decode and verify
    print("4. Decoding and verifying...")
    decoded = decode_token(urls[Scheme.BASE32768], key=KEY, verify=True)
    print(f"   Detected scheme: {decoded.scheme.value}")
    print(f"   Tag verified: {decoded.verified}")
    if decoded.record == record:
        print("   ✓ Round-trip successful! Records match.")
    else:
        print("   ✗ Round-trip failed! Records don't match.")
    print()

    # Reconstruct the command
    print("5. Reconstructing the encode command...")
    print(f"   {decoded.command()}")
    print()

    # Compare to JSON
    print("6. Comparing to JSON...")
    json_bytes = record.model_dump_json().encode("utf-8")
    print(f"   JSON size: {len(json_bytes)} bytes")
    print(f"   base65536 size: {encoded_length(record, Scheme.BASE65536)} characters")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
