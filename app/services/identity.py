from __future__ import annotations

import hashlib


def anonymize_address(raw_address: str | None) -> str:
    """Return the SHA-256 hex digest of a caller address.

    There is no salt, so equal addresses always map to the same token. A
    missing address hashes the empty string and every such caller shares one
    identity.
    """
    value = "" if raw_address is None else str(raw_address)
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def resolve_caller_address(forwarded_for: str | None, client_host: str | None) -> str:
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return (client_host or "").strip()
