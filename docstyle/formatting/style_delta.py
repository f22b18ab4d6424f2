#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Override deltas - copy-on-write per-element style overrides.

The editor stores only the keys that differ from an element's base style.
An element edited back to exactly its base style loses its override key
entirely; an empty delta is never stored.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping

from .profile import Overrides

logger = logging.getLogger(__name__)


def compute_style_delta(current: Mapping[str, Any], base: Mapping[str, Any]) -> Dict[str, Any]:
    """Keys of `current` whose value differs from `base`."""
    return {
        key: value
        for key, value in current.items()
        if key not in base or base[key] != value
    }


def is_delta_empty(delta: Mapping[str, Any]) -> bool:
    return not delta


def update_override(
    overrides: Mapping[str, Mapping[str, Any]],
    element_id: str,
    current: Mapping[str, Any],
    base: Mapping[str, Any],
) -> Overrides:
    """
    Store an element's edited style as a delta against its base.

    Args:
        overrides: Current override map (left untouched)
        element_id: Element being edited
        current: Full style after the edit
        base: Resolved base style of the element (without its override)

    Returns:
        New override map with the element's key set, or removed when the
        edit brings the element back to its base style
    """
    updated = {key: dict(value) for key, value in overrides.items()}
    delta = compute_style_delta(current, base)
    if is_delta_empty(delta):
        if updated.pop(element_id, None) is not None:
            logger.debug(f"Override cleared: {element_id}")
    else:
        updated[element_id] = delta
    return updated


def find_orphaned_overrides(overrides: Mapping[str, Any], used_ids: Iterable[str]) -> List[str]:
    """
    Override keys that no element of the last render produced.

    Ids are derived from leading content, so editing that content detaches
    the override. Orphans are reported, not migrated.
    """
    produced = set(used_ids)
    orphans = sorted(key for key in overrides if key not in produced)
    if orphans:
        logger.info(f"{len(orphans)} override(s) match no element: {', '.join(orphans[:5])}")
    return orphans
