"""Outcome of a store command."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..errors import InvalidPatchError, StaleReferenceError


class CommandResult(str, Enum):
    APPLIED = "applied"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"

    @property
    def applied(self) -> bool:
        return self is CommandResult.APPLIED

    def raise_for_status(self, message: Optional[str] = None) -> "CommandResult":
        """Raise for non-applied results; return self otherwise so calls can chain."""
        if self is CommandResult.NOT_FOUND:
            raise StaleReferenceError(message or "Command referenced a missing resume, version, section, or item")
        if self is CommandResult.REJECTED:
            raise InvalidPatchError(message or "Command patch did not validate")
        return self
