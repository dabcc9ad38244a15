from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .context import AuthContext


class TokenService(Protocol):
    """Resolves an opaque bearer token to an AuthContext (black box to this package)."""

    def resolve(self, token: str) -> AuthContext:
        raise NotImplementedError


class StaticTokenService(TokenService):
    """Token table kept in memory; used for local runs and tests."""

    def __init__(self, tokens: Mapping[str, AuthContext]):
        self._tokens = dict(tokens)

    @classmethod
    def from_config(cls, raw: Optional[Mapping[str, Mapping]]) -> "StaticTokenService":
        """Build from settings shaped like {"token": {"user_id": 1, "role": "admin", ...}}."""
        tokens: dict[str, AuthContext] = {}
        for token, entry in (raw or {}).items():
            tokens[token] = AuthContext(
                user_id=int(entry["user_id"]),
                role=Role(entry["role"]),
                student_id=int(entry["student_id"]) if entry.get("student_id") is not None else None,
                ward_ids=frozenset(int(w) for w in entry.get("ward_ids", ())),
            )
        return cls(tokens)

    def resolve(self, token: str) -> AuthContext:
        ctx = self._tokens.get((token or "").strip())
        if ctx is None:
            raise AuthenticationError("Invalid or expired token")
        return ctx
