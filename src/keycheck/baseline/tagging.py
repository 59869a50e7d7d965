"""Auto-tagging of key usages by id substring."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from keycheck.config import DEFAULT_TAG_RULE_SET, TagRule
from keycheck.model import ScanResult

logger = logging.getLogger(__name__)


def apply_auto_tags(result: ScanResult, rules: Sequence[TagRule] = DEFAULT_TAG_RULE_SET) -> int:
    """Add the tag of every rule whose pattern occurs in a key id (case-insensitive).

    Mutates ``result.key_usages`` and the matching ``source_usages`` in place and
    returns the number of tags added.
    """
    added = 0
    for usage in [*result.key_usages.values(), *result.source_usages]:
        key = usage.id.lower()
        for rule in rules:
            if rule.pattern.lower() in key and rule.tag not in usage.tags:
                usage.tags.add(rule.tag)
                added += 1
    logger.debug("Auto-tagging added %d tags", added)
    return added
