"""Main CLI entry point for alertlink."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from .. import __version__
from ..codec.schema import MessageSchema
from ..config import LOG_FORMATS, LOG_LEVELS, AlertlinkConfig, LoggingConfig, load_config
from ..exceptions import AlertlinkError
from ..models.base import BaseRecord
from ..models.fields import UINT32_MAX
from ..models.records import RECORD_TYPES, Epicenter
from ..pipeline import decode_token, encode_record
from ..transport.schemes import Scheme

log = structlog.get_logger()

# Single-letter flags for the tsunami buckets
_SHORT_FLAGS = {
    "forecast": "-f",
    "advisory": "-a",
    "warning": "-w",
    "major_warning": "-m",
}


def setup_logging(config: LoggingConfig) -> None:
    """Configure structlog to write to stderr based on the logging config."""
    processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.level.upper()),
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def parse_time(value: str) -> int:
    """Parse Unix seconds or an ISO 8601 timestamp (naive values are UTC)."""
    if value.isdigit():
        return int(value)

    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid time {value!r}: {e}") from e

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    seconds = int(moment.timestamp())
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"time before 1970 is not supported: {value!r}")
    return seconds


def parse_epicenter(value: str) -> Epicenter:
    """Parse ``LAT,LON`` in decimal degrees."""
    lat, sep, lon = value.partition(",")
    if not sep:
        raise argparse.ArgumentTypeError(f"epicenter must be LAT,LON, got {value!r}")

    try:
        return Epicenter.from_degrees(float(lat), float(lon))
    except (ValueError, OverflowError, ValidationError) as e:
        raise argparse.ArgumentTypeError(f"invalid epicenter {value!r}: {e}") from e


def parse_code(value: str) -> int:
    """Parse an unsigned 32-bit region code."""
    try:
        code = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid code {value!r}") from e
    if not 0 <= code <= UINT32_MAX:
        raise argparse.ArgumentTypeError(f"code must be 0-{UINT32_MAX}, got {code}")
    return code


def _payload_classes() -> dict[str, type[BaseRecord]]:
    return {
        record_class.command_name: record_class
        for record_class in RECORD_TYPES.values()
        if record_class.command_name is not None
    }


def _add_payload_parser(
    payloads: argparse._SubParsersAction, name: str, record_class: type[BaseRecord]
) -> None:
    parser = payloads.add_parser(name, help=(record_class.__doc__ or "").splitlines()[0])
    parser.add_argument("-t", "--time", type=parse_time, required=True, help="Unix seconds or ISO 8601")
    parser.add_argument("-e", "--epicenter", type=parse_epicenter, help="LAT,LON in decimal degrees")

    for field_schema in MessageSchema.from_model(record_class).code_fields():
        flags = ["--" + field_schema.name.replace("_", "-")]
        if record_class.command_name == "tsunami" and field_schema.name in _SHORT_FLAGS:
            flags.insert(0, _SHORT_FLAGS[field_schema.name])
        parser.add_argument(
            *flags,
            dest=field_schema.name,
            type=parse_code,
            action="append",
            metavar="CODE",
            help=f"Region code for {field_schema.name} (repeatable)",
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="alertlink",
        description="alertlink: Shareable Disaster Alert Strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  alertlink encode base32768 v0 --time 2023-11-14T22:13:20Z --epicenter 35.6,139.7 --one 130000
  alertlink encode -p https://example.org/a/ base32768 tsunami -t 1700000000 -f 10 -f 20
  alertlink decode https://example.org/a/<token>
        """,
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level (stderr)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log renderer")
    parser.add_argument("--version", action="version", version=f"alertlink {__version__}")

    modes = parser.add_subparsers(dest="mode")

    encode = modes.add_parser("encode", help="Encode a record as a shareable string")
    encode.add_argument("-p", "--prefix", default="", help="Literal prefix to print before the token")
    schemes = encode.add_subparsers(dest="scheme", required=True)
    for scheme in Scheme:
        scheme_parser = schemes.add_parser(scheme.value, help=f"Encode with {scheme.value}")
        scheme_parser.add_argument("--hmac-key", default=None, help="HMAC key (default: empty)")
        payloads = scheme_parser.add_subparsers(dest="payload", required=True)
        for name, record_class in _payload_classes().items():
            _add_payload_parser(payloads, name, record_class)

    decode = modes.add_parser("decode", help="Decode a token or URL")
    decode.add_argument("url", help="Encoded token, optionally inside a URL")
    decode.add_argument("--hmac-key", default=None, help="HMAC key to check the tag with")
    decode.add_argument(
        "--verify", action="store_true", help="Fail if the tag does not match (fail closed)"
    )
    decode.add_argument("--json", action="store_true", help="Print one JSON document")

    return parser


def _run_encode(args: argparse.Namespace, config: AlertlinkConfig) -> int:
    record_class = _payload_classes()[args.payload]
    values = {
        field_schema.name: tuple(getattr(args, field_schema.name) or ())
        for field_schema in MessageSchema.from_model(record_class).code_fields()
    }

    try:
        record = record_class(time=args.time, epicenter=args.epicenter, **values)
    except ValidationError as e:
        print(f"Error: invalid {args.payload} payload: {e}", file=sys.stderr)
        return 2

    key = args.hmac_key if args.hmac_key is not None else config.hmac_key
    print(encode_record(record, args.scheme, key=key, prefix=args.prefix))
    return 0


def _run_decode(args: argparse.Namespace, config: AlertlinkConfig) -> int:
    key: Optional[str] = args.hmac_key
    if key is None and (args.verify or config.hmac_key):
        key = config.hmac_key

    decoded = decode_token(args.url, key=key, verify=args.verify)
    record = decoded.record
    command = decoded.command(program=config.program)

    if args.json:
        document = {
            "scheme": decoded.scheme.value,
            "type_id": decoded.type_id,
            "record_type": type(record).__name__,
            "tag": decoded.tag.hex(),
            "verified": decoded.verified,
            "record": record.model_dump(mode="json"),
            "command": command,
        }
        print(json.dumps(document, indent=2))
        return 0

    print(f"{type(record).__name__} {record.model_dump_json(indent=2)}")
    print(command)

    if decoded.verified is True:
        print("Authentication tag verified", file=sys.stderr)
    elif decoded.verified is False:
        print("Warning: authentication tag does not match", file=sys.stderr)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the alertlink CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 2

    parser = build_parser()
    args = parser.parse_args(argv)

    config.logging = LoggingConfig(
        level=args.log_level or config.logging.level,
        format=args.log_format or config.logging.format,
    )
    setup_logging(config.logging)

    try:
        if args.mode == "encode":
            return _run_encode(args, config)
        if args.mode == "decode":
            return _run_decode(args, config)
    except AlertlinkError as e:
        log.debug("command_failed", mode=args.mode, stage=e.stage, error=str(e))
        print(f"Error ({e.stage}): {e}", file=sys.stderr)
        return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
