"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass, field

from .adapters.base import Principal


@dataclass(frozen=True)
class Identity:
    """Signed-in caller as seen by resolvers."""

    username: str
    subject: str
    claims: dict = field(default_factory=dict, compare=False)


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    principal: Principal | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    @property
    def provider(self) -> str | None:
        return self.principal["provider"] if self.principal else None

    @property
    def identity(self) -> Identity | None:
        if self.principal is None:
            return None
        return Identity(
            username=self.principal["username"],
            subject=self.principal["subject"],
            claims=self.principal.get("claims", {}),
        )


ANONYMOUS = AuthContext(principal=None, token=None)
