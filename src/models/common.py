# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared request base and the unified mutation result type.

Every mutation handler returns either MutationSuccess or MutationFailure.
Both carry the ``success``/``error`` flags the presentation layer keeps as
form state; failures add a machine-readable kind and a message.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Base for mutation payloads.

    Accepts both snake_case field names and the camelCase keys sent by
    browser forms (``classId``, ``startTime``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class ErrorKind(str, Enum):
    """Why a mutation failed."""

    VALIDATION = "validation"
    PRECONDITION = "precondition"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    IDENTITY = "identity"
    STORE = "store"
    UNEXPECTED = "unexpected"


class MutationSuccess(BaseModel):
    """Successful mutation, optionally carrying the mutated entity."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: Literal[True] = True
    error: Literal[False] = False
    data: Any = Field(None, description="Mutated entity, list of entities, or None")


class MutationFailure(BaseModel):
    """Failed mutation."""

    success: Literal[False] = False
    error: Literal[True] = True
    kind: ErrorKind = Field(..., description="Failure category")
    message: str = Field(..., description="Human-readable failure description")


MutationResult = MutationSuccess | MutationFailure


def blank_to_none(value: Any) -> Any:
    """Map empty form strings to None so optional fields stay unset."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
