#!/usr/bin/env python3
"""
KUBEPREVIEW PREVIEW PIPELINE
----------------------------
Straight-line recomputation of the preview text: redact, then serialize.

The result is memoized on (object identity, flag value). Handing the same
object back with the same flag reuses the previous context; anything else
is rebuilt from scratch. Serialization failures stop here and become a
placeholder result, so the display surface never sees an exception.

Author: KubePreview Team
Date: 2026-10-19
"""

import logging
from typing import Any, Optional

from kubepreview.core.models import DEFAULT_LABELS, Labels
from kubepreview.preview.context import PreviewContext
from kubepreview.preview.redactor import redact
from kubepreview.preview.serializer import KubeSerializer

logger = logging.getLogger("kubepreview.pipeline")


class PreviewPipeline:
    """
    The Orchestrator: keeps the preview text a pure function of
    (source object, redaction flag).
    """

    def __init__(self, serializer: Optional[KubeSerializer] = None, labels: Labels = DEFAULT_LABELS):
        self.serializer = serializer or KubeSerializer()
        self.labels = labels
        self.computations = 0
        self._last: Optional[PreviewContext] = None

    def _is_cached(self, item: Any, hide_managed_fields: bool) -> bool:
        last = self._last
        return (
            last is not None
            and last.source is item
            and last.hide_managed_fields == hide_managed_fields
        )

    def run(self, item: Any, hide_managed_fields: bool = True) -> PreviewContext:
        """Returns the context for this input pair, recomputing only on change."""
        hide_managed_fields = bool(hide_managed_fields)
        if self._is_cached(item, hide_managed_fields):
            return self._last

        # --- PHASE 1: REDACTION ---
        display_object = redact(item, hide_managed_fields)

        # --- PHASE 2: SERIALIZATION ---
        result = self.serializer.render(display_object, failure_label=self.labels.render_failed)

        self.computations += 1
        logger.debug(
            f"Recomputed preview #{self.computations} "
            f"(hide_managed_fields={hide_managed_fields}, ok={result.ok})"
        )

        self._last = PreviewContext(
            source=item,
            hide_managed_fields=hide_managed_fields,
            display_object=display_object,
            result=result,
        )
        return self._last

    def invalidate(self):
        """Forgets the memoized context (e.g. when the dialog unmounts)."""
        self._last = None
