"""Command reconstruction for decoded records.

Given a decoded record, render the ``alertlink encode ...`` invocation that would
produce the same body again. The authentication key is never recoverable and is
not rendered; the CLI default (empty key) applies when the command is re-run.
"""

from __future__ import annotations

import shlex
from datetime import datetime, timezone

from .codec.schema import MessageSchema
from .exceptions import UnsupportedTypeId
from .models.base import BaseRecord
from .transport.schemes import Scheme

DEFAULT_PROGRAM = "alertlink"


def format_time(seconds: int) -> str:
    """Render Unix seconds as ``YYYY-MM-DDTHH:MM:SSZ``.

    Times beyond what datetime can represent are rendered as plain Unix seconds,
    which the CLI accepts as well.
    """
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(seconds)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_x10(value: int) -> str:
    """Render a fixed-point tenths value as decimal degrees without rounding.

    Example:
        >>> format_x10(356), format_x10(1390), format_x10(-5)
        ('35.6', '139', '-0.5')
    """
    sign = "-" if value < 0 else ""
    whole, tenths = divmod(abs(value), 10)
    if tenths:
        return f"{sign}{whole}.{tenths}"
    return f"{sign}{whole}"


def reconstruct_command(
    record: BaseRecord,
    scheme: Scheme | str,
    program: str = DEFAULT_PROGRAM,
) -> str:
    """Render the encode invocation that re-produces a record.

    Each code bucket is rendered from its own field, in declaration order, with one
    flag per code.

    Args:
        record: Decoded record
        scheme: Scheme the record was carried in
        program: Program name to start the command with

    Returns:
        Shell-quoted command line

    Raises:
        UnsupportedTypeId: If the record class has no CLI payload command

    Example:
        >>> record = QuakePrefectureData(time=1700000000, one=[130000])
        >>> reconstruct_command(record, Scheme.BASE32768)
        'alertlink encode base32768 v0 --time 2023-11-14T22:13:20Z --one 130000'
    """
    record_class = type(record)
    if record_class.command_name is None:
        raise UnsupportedTypeId(record_class.type_id)

    parts = [
        program,
        "encode",
        Scheme(scheme).value,
        record_class.command_name,
        "--time",
        format_time(record.time),  # type: ignore[attr-defined]
    ]

    epicenter = getattr(record, "epicenter", None)
    if epicenter is not None:
        location = f"{format_x10(epicenter.lat_x10)},{format_x10(epicenter.lon_x10)}"
        # argparse would read a leading '-' as an option flag
        if location.startswith("-"):
            parts.append(f"--epicenter={location}")
        else:
            parts.extend(["--epicenter", location])

    for field_schema in MessageSchema.from_model(record_class).code_fields():
        flag = "--" + field_schema.name.replace("_", "-")
        for code in getattr(record, field_schema.name):
            parts.extend([flag, str(code)])

    return shlex.join(parts)
