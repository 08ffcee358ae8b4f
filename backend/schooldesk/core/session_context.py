"""Session Context: bearer token holder passed explicitly to the transport.

Invariants:
    - authorization_header() is empty when signed out
    - Lifecycle bound to sign_in/sign_out; nothing read from ambient storage
"""

from dataclasses import dataclass


@dataclass
class SessionContext:
    token: str | None = None

    @property
    def signed_in(self) -> bool:
        return bool(self.token)

    def sign_in(self, token: str) -> None:
        self.token = token

    def sign_out(self) -> None:
        self.token = None

    def authorization_header(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
