"""Per-request caller identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Viewer:
    """Session state resolved once per request.

    ``user_id`` is None both for anonymous callers and for the admin
    fallback identity, which has no row in the users table.
    """

    authenticated: bool = False
    user_id: int | None = None
    is_admin: bool = False

    @property
    def has_account(self) -> bool:
        return self.authenticated and self.user_id is not None


ANONYMOUS = Viewer()
