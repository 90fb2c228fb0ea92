#!/usr/bin/env python3
"""
KUBEPREVIEW CORE MODELS
-----------------------
Defines the data structures shared between the preview pipeline and the
surfaces that display it. These models are the contract with the dialog
host, the toggle control and the read-only text surface.

Author: KubePreview Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ColorScheme(str, Enum):
    """Colour scheme requested by the host application."""
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Labels:
    """
    Translated UI strings.

    Injected by the host so the core never reads a global translation table.
    """
    hide_managed_fields: str = "Hide managed fields"
    close: str = "Close"
    render_failed: str = "Unable to render preview"


DEFAULT_LABELS = Labels()


@dataclass(frozen=True)
class RenderResult:
    """
    Outcome of one serialize step.

    On failure `text` holds the placeholder shown instead of the content
    and `error` carries the reason.
    """
    ok: bool
    text: str
    error: Optional[str] = None


@dataclass(frozen=True)
class DisplayProps:
    """Props for the read-only text surface."""
    content: str
    color_scheme: ColorScheme = ColorScheme.DARK
    syntax_mode: str = "yaml"
    read_only: bool = True


@dataclass(frozen=True)
class DialogProps:
    """Props for the dialog host."""
    is_open: bool
    title: str
    full_screen_capable: bool = True


@dataclass(frozen=True)
class ToggleProps:
    """Props for the 'hide managed fields' switch."""
    checked: bool
    label: str


@dataclass(frozen=True)
class DialogView:
    """Everything a host needs to draw one frame of the preview dialog."""
    dialog: DialogProps
    toggle: ToggleProps
    display: DisplayProps
    close_label: str
    render_ok: bool = True
