"""Authentication: exact-match API key check.

Invariants:
    - Missing, empty or mismatched credential is never authorized
    - No configured secret means nothing is authorized (fail closed)
    - Comparison is constant time over UTF-8 bytes, no trimming or prefix matching
    - The credential value is never logged
"""

import secrets

API_KEY_HEADER = "X-API-Key"


def is_authorized(presented: str | None, configured: str | None) -> bool:
    """True iff a non-empty secret is configured and presented matches it exactly."""
    if not configured or not presented:
        return False
    return secrets.compare_digest(
        presented.encode("utf-8"), configured.encode("utf-8"),
    )
