"""Base record class and alertlink-specific Pydantic configuration.

This module provides the BaseRecord class that all alert records and their nested
messages inherit from.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..transport.schemes import Scheme


class BaseRecord(BaseModel):
    """Base class for all alertlink records.

    Records are immutable value types. Fields are declared with the helpers in
    ``alertlink.models.fields``, which attach the protobuf field number and wire
    type used by ``alertlink.codec``.

    Top-level records also set the class variables below; nested messages such
    as Epicenter leave them unset.

    Attributes:
        type_id: Envelope type id selecting this record shape
        command_name: Payload subcommand used by the CLI for this shape
        allowed_schemes: Text schemes this shape may be encoded with
    """

    model_config = ConfigDict(
        # Records are constructed once and never mutated
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    type_id: ClassVar[int | None] = None
    command_name: ClassVar[str | None] = None
    allowed_schemes: ClassVar[frozenset[Scheme]] = frozenset()
