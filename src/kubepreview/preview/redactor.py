#!/usr/bin/env python3
"""
KUBEPREVIEW REDACTOR
--------------------
Produces the display copy of a dry-run result. The source object belongs to
the caller and is never touched: every mapping and sequence is rebuilt, and
`metadata.managedFields` is dropped from the copy when redaction is on.

Author: KubePreview Team
Date: 2026-10-19
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

MANAGED_FIELDS_PATH = ("metadata", "managedFields")


# Marks a stack entry that assembles a tuple once its items are copied
_BUILD_TUPLE = object()


def clone_tree(node: Any, _memo: Optional[Dict[int, Any]] = None) -> Any:
    """
    Deep copy of a mapping/sequence/scalar tree.

    Mappings become plain dicts with their key order kept. Scalars and
    anything else are returned as-is. Cycles are reproduced in the copy.
    Walks with an explicit stack, so nesting depth is not bounded by the
    interpreter's recursion limit.
    """
    if _memo is None:
        _memo = {}

    holder = [None]
    stack = [(node, holder, 0)]
    pending_tuples = set()

    while stack:
        entry = stack.pop()

        if entry[0] is _BUILD_TUPLE:
            _, source, items, target, slot = entry
            copied = tuple(items)
            _memo[id(source)] = copied
            pending_tuples.discard(id(source))
            target[slot] = copied
            continue

        source, target, slot = entry
        source_id = id(source)
        if source_id in _memo:
            target[slot] = _memo[source_id]
            continue

        if isinstance(source, Mapping):
            # Keys are laid down now so the copy keeps the source order
            copied = dict.fromkeys(source)
            _memo[source_id] = copied
            target[slot] = copied
            stack.extend((value, copied, key) for key, value in source.items())

        elif isinstance(source, list):
            copied = [None] * len(source)
            _memo[source_id] = copied
            target[slot] = copied
            stack.extend((item, copied, idx) for idx, item in enumerate(source))

        elif isinstance(source, tuple):
            # A tuple reached again before it is built loops back through a
            # list or dict; that inner reference keeps pointing at the source.
            if source_id in pending_tuples:
                target[slot] = source
                continue
            pending_tuples.add(source_id)
            items = [None] * len(source)
            stack.append((_BUILD_TUPLE, source, items, target, slot))
            stack.extend((item, items, idx) for idx, item in enumerate(source))

        else:
            target[slot] = source

    return holder[0]


def redact(obj: Any, hide_managed: bool) -> Any:
    """
    Returns a deep copy of `obj`, without `metadata.managedFields` when
    `hide_managed` is set. Shapes that lack the path pass through unchanged.
    """
    cloned = clone_tree(obj)

    if not hide_managed or not isinstance(cloned, dict):
        return cloned

    parent_key, field = MANAGED_FIELDS_PATH
    metadata = cloned.get(parent_key)
    if isinstance(metadata, dict):
        metadata.pop(field, None)

    return cloned
