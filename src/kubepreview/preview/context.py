#!/usr/bin/env python3
"""
KUBEPREVIEW PREVIEW CONTEXT
---------------------------
The record of one recomputation: which object and flag went in, which
display copy was built from them, and what the serializer made of it.

Author: KubePreview Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, Optional

from kubepreview.core.models import RenderResult


@dataclass
class PreviewContext:
    """
    Built by the PreviewPipeline and discarded whenever its inputs change.
    """
    source: Any                  # The caller-owned dry-run result (never mutated)
    hide_managed_fields: bool    # Redaction flag the display copy was built with
    display_object: Any = None   # Deep copy handed to the serializer
    result: Optional[RenderResult] = None  # Rendered text or placeholder

    @property
    def text(self) -> str:
        return self.result.text if self.result else ""
