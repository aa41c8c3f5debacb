"""User entity — anyone who signs in: teachers, TAs, students, admins."""

from dataclasses import dataclass


@dataclass
class User:
    id: int | None
    name: str
    site_admin: bool = False
