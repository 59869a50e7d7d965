"""Token similarity used for rename detection."""

from __future__ import annotations

from keycheck.constants.policy import KEY_TOKEN_SPLIT_PATTERN


def tokenize_key(key: str) -> frozenset[str]:
    """Split a key id on ``.``, ``_`` and ``-``, dropping empty tokens."""
    return frozenset(token for token in KEY_TOKEN_SPLIT_PATTERN.split(key) if token)


def similarity(left: str, right: str) -> float:
    """Jaccard index of the two keys' token sets; 0 when both sets are empty."""
    left_tokens = tokenize_key(left)
    right_tokens = tokenize_key(right)
    common = len(left_tokens & right_tokens)
    union = len(left_tokens) + len(right_tokens) - common
    if union == 0:
        return 0.0
    return common / union
