# SPDX-License-Identifier: MIT
"""Custom exceptions for rcons.

All rcons exceptions inherit from RconsError, which includes
optional location information (usually an action file and key)
for better error messages.
"""

from __future__ import annotations


class RconsError(Exception):
    """Base class for all rcons exceptions.

    Attributes:
        message: The error message.
        location: Optional location where the error occurred.
    """

    def __init__(
        self,
        message: str,
        location: str | None = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ConfigureError(RconsError):
    """Error while loading an action description.

    Raised when the description is malformed or names an unknown
    invocation kind or crate type.
    """


class MissingFieldError(ConfigureError):
    """Required field is absent from an action description.

    Attributes:
        field: Dotted name of the missing field.
    """

    def __init__(
        self,
        field: str,
        location: str | None = None,
    ) -> None:
        self.field = field
        super().__init__(f"missing required field: {field}", location)


class BuilderError(RconsError):
    """Error in a command builder invocation."""
