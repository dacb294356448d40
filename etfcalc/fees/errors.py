"""Validation errors raised for bad trade input."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Base class for rejected trade input.

    ``fields`` names the offending inputs; ``user_message`` is the text a
    front end should show.
    """

    user_message = "Invalid input"

    def __init__(self, fields: tuple[str, ...] | list[str] = (), detail: str = ""):
        self.fields = tuple(fields)
        self.detail = detail
        text = self.user_message
        if self.fields:
            text = f"{text} ({', '.join(self.fields)})"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(text)


class MissingFieldError(InvalidInputError):
    user_message = "Please fill in all fields"


class NotANumberError(InvalidInputError):
    user_message = "Please enter valid numbers"


class NonPositiveError(InvalidInputError):
    user_message = "Please enter positive numbers"
