#!/usr/bin/env python3
"""
KUBEPREVIEW ENGINE - The Session Owner
--------------------------------------
PreviewSession holds the state of one preview dialog: whether it is open,
which dry-run result it shows and whether managed fields are hidden.
Everything the host draws is derived from that state through the
PreviewPipeline; nothing is computed while the dialog is closed.

Author: KubePreview Team
Date: 2026-10-19
"""

import logging
from typing import Any, Callable, Optional

from kubepreview.core.models import (
    DEFAULT_LABELS,
    ColorScheme,
    DialogProps,
    DialogView,
    DisplayProps,
    Labels,
    RenderResult,
    ToggleProps,
)
from kubepreview.preview.pipeline import PreviewPipeline

logger = logging.getLogger("kubepreview.engine")

# Default for open(): distinguishes "keep the current item" from a None item
_KEEP_ITEM = object()


def default_title(item: Any) -> str:
    """'Dry Run Preview: Deployment/web' style title for a resource."""
    kind, name = "Resource", None
    if isinstance(item, dict):
        kind = item.get("kind") or kind
        metadata = item.get("metadata")
        if isinstance(metadata, dict):
            name = metadata.get("name")
    return f"Dry Run Preview: {kind}/{name}" if name else f"Dry Run Preview: {kind}"


class PreviewSession:
    """
    State owner for the dry-run preview dialog.

    Theme and labels are passed in by the host; the session never reaches
    for global UI configuration.
    """

    def __init__(self, item: Any, title: Optional[str] = None,
                 on_close: Optional[Callable[[], None]] = None,
                 hide_managed_fields: bool = True,
                 color_scheme: ColorScheme = ColorScheme.DARK,
                 labels: Labels = DEFAULT_LABELS,
                 pipeline: Optional[PreviewPipeline] = None):
        self.item = item
        self.fixed_title = title
        self.title = title or default_title(item)
        self.on_close = on_close
        self.hide_managed_fields = hide_managed_fields
        self.color_scheme = ColorScheme(color_scheme)
        self.labels = labels
        self.pipeline = pipeline or PreviewPipeline(labels=labels)
        self.is_open = False

    def open(self, item: Any = _KEEP_ITEM):
        """Opens the dialog, optionally on a new dry-run result."""
        if item is not _KEEP_ITEM:
            self.set_item(item)
        self.is_open = True
        logger.info(f"Opened preview '{self.title}'")

    def close(self):
        """User dismissal: drops derived state and notifies the host."""
        if not self.is_open:
            return
        self.is_open = False
        self.pipeline.invalidate()
        logger.info(f"Closed preview '{self.title}'")
        if self.on_close:
            self.on_close()

    def set_item(self, item: Any):
        """Swaps the dry-run result; a derived title follows the new resource."""
        self.item = item
        if not self.fixed_title:
            self.title = default_title(item)

    def toggle_managed_fields(self) -> bool:
        """Flips the redaction flag and returns the new value."""
        self.hide_managed_fields = not self.hide_managed_fields
        logger.debug(f"hide_managed_fields -> {self.hide_managed_fields}")
        return self.hide_managed_fields

    def content(self) -> Optional[RenderResult]:
        """The current preview, or None while the dialog is closed."""
        if not self.is_open:
            return None
        return self.pipeline.run(self.item, self.hide_managed_fields).result

    def view(self) -> Optional[DialogView]:
        """Props for the dialog host, toggle and text surface."""
        result = self.content()
        if result is None:
            return None

        return DialogView(
            dialog=DialogProps(is_open=True, title=self.title, full_screen_capable=True),
            toggle=ToggleProps(checked=self.hide_managed_fields, label=self.labels.hide_managed_fields),
            display=DisplayProps(content=result.text, color_scheme=self.color_scheme),
            close_label=self.labels.close,
            render_ok=result.ok,
        )
