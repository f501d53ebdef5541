"""Explicit student session passed to API calls."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """Who is calling the student API.

    Callers build one and hand it to the API client; nothing reads
    credentials from ambient state.
    """

    student_id: str | None = None
    cohort_id: str | None = None
    auth_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.student_id and self.cohort_id)

    def authorization_header(self) -> dict[str, str]:
        if not self.auth_token:
            return {}
        return {"Authorization": f"Bearer {self.auth_token}"}
