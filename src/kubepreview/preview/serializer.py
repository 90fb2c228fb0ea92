#!/usr/bin/env python3
"""
KUBEPREVIEW SERIALIZER - Deterministic YAML Export
--------------------------------------------------
Converts a display object into block-style YAML for the read-only preview.
Keys are written in insertion order, shared references are expanded in full,
and anything YAML cannot carry (cycles, functions, arbitrary objects) is
reported as a SerializationError instead of leaking a ruamel traceback.

Author: KubePreview Team
Date: 2026-10-19
"""

import datetime
import io
import logging
from collections.abc import Mapping
from typing import Any, Optional, Set

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.representer import RoundTripRepresenter

from kubepreview.core.models import DEFAULT_LABELS, RenderResult

logger = logging.getLogger("kubepreview.serializer")

SCALAR_TYPES = (str, int, float, bool, type(None), datetime.date)


class SerializationError(Exception):
    """The display object cannot be expressed as YAML."""
    pass


class PreviewRepresenter(RoundTripRepresenter):
    """
    Round-trip representer tuned for previews: no &anchors/*aliases and
    an explicit `null` instead of an empty value.
    """

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_null(representer: RoundTripRepresenter, data: Any):
    return representer.represent_scalar("tag:yaml.org,2002:null", "null")


PreviewRepresenter.add_representer(type(None), _represent_null)


def _child_path(path: str, key: Any) -> str:
    if isinstance(key, int) and not isinstance(key, bool):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else str(key)


class KubeSerializer:
    """
    The Printer: turns (possibly redacted) resource trees into YAML text.
    """

    def __init__(self):
        self.yaml = self._build_yaml()

    def _build_yaml(self) -> YAML:
        yaml = YAML(typ='rt')
        yaml.Representer = PreviewRepresenter
        # Standard K8s: 2 spaces, sequences indented 4 (offset 2)
        yaml.indent(mapping=2, sequence=4, offset=2)
        yaml.width = 4096
        return yaml

    def _to_document(self, node: Any, path: str, active: Set[int]) -> Any:
        """
        Rebuilds the tree as CommentedMap/CommentedSeq so ruamel keeps the
        insertion order and block style. `active` holds the containers on the
        current path; meeting one again means the tree loops back on itself.
        """
        if isinstance(node, SCALAR_TYPES):
            return node

        is_mapping = isinstance(node, Mapping)
        if not is_mapping and not isinstance(node, (list, tuple)):
            where = path or "document root"
            raise SerializationError(f"cannot represent {type(node).__name__} at {where}")

        node_id = id(node)
        if node_id in active:
            raise SerializationError(f"circular reference at {path or 'document root'}")
        active.add(node_id)

        if is_mapping:
            out = CommentedMap()
            for key, value in node.items():
                if not isinstance(key, SCALAR_TYPES):
                    raise SerializationError(
                        f"cannot represent {type(key).__name__} key at {path or 'document root'}"
                    )
                out[key] = self._to_document(value, _child_path(path, key), active)
        else:
            out = CommentedSeq(
                self._to_document(item, _child_path(path, idx), active)
                for idx, item in enumerate(node)
            )

        active.discard(node_id)
        return out

    def serialize(self, obj: Any) -> str:
        """Returns the YAML text for `obj` or raises SerializationError."""
        try:
            document = self._to_document(obj, "", set())
        except RecursionError:
            raise SerializationError("structure is nested too deeply to render")

        stream = io.StringIO()
        try:
            self.yaml.dump(document, stream)
        except YAMLError as e:
            raise SerializationError(str(e)) from e
        except RecursionError:
            # ruamel recurses deeper than _to_document; a half-finished dump
            # leaves its representer state behind, so start over next time.
            self.yaml = self._build_yaml()
            raise SerializationError("structure is nested too deeply to render")
        return stream.getvalue()

    def render(self, obj: Any, failure_label: Optional[str] = None) -> RenderResult:
        """
        Serialize step with an explicit outcome. Failures come back as a
        placeholder comment so the display surface always has text to show.
        """
        try:
            return RenderResult(ok=True, text=self.serialize(obj))
        except SerializationError as e:
            logger.warning(f"Preview serialization failed: {e}")
            label = failure_label or DEFAULT_LABELS.render_failed
            return RenderResult(ok=False, text=f"# {label}: {e}\n", error=str(e))


def serialize(obj: Any) -> str:
    """Module-level shortcut for KubeSerializer().serialize."""
    return KubeSerializer().serialize(obj)
