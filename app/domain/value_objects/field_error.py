"""FieldError value object — one validation failure on one attribute."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    attribute: str
    message: str
