from __future__ import annotations


class OwnershipPolicy:
    """Interface deciding whether ``requester`` may act on behalf of ``owner``."""

    def is_authorized(self, owner: str, requester: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError


class StringIdentityPolicy(OwnershipPolicy):
    """Caller-supplied identity string must equal the recorded owner."""

    def is_authorized(self, owner: str, requester: str) -> bool:
        return owner == requester


__all__ = ["OwnershipPolicy", "StringIdentityPolicy"]
