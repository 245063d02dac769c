"""Ok / Err: the validator return contract.

INVARIANT: validators never raise for bad input. They return
``Ok(data=...)`` or ``Err(error=...)`` where ``error`` is the message of
the first failing field.
"""

from __future__ import annotations

from typing import Generic, Literal, TypeAlias, TypeVar

from pydantic import BaseModel

T = TypeVar("T")
R = TypeVar("R")


class Ok(BaseModel, Generic[T]):
    """Successful validation carrying the normalized value."""

    model_config = {"frozen": True}

    ok: Literal[True] = True
    data: T


class Err(BaseModel):
    """Failed validation carrying user-facing copy."""

    model_config = {"frozen": True}

    ok: Literal[False] = False
    error: str


ValidationResult: TypeAlias = Ok[R] | Err
