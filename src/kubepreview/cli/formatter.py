# src/kubepreview/cli/formatter.py
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from kubepreview.core.models import ColorScheme, DialogView

# Initialize the Rich console for high-quality terminal output
console = Console()

SYNTAX_THEMES = {
    ColorScheme.DARK: "ansi_dark",
    ColorScheme.LIGHT: "ansi_light",
}


class PreviewFormatter:
    """
    PreviewFormatter: draws a DialogView in the terminal.
    The panel plays the dialog host, the status line plays the toggle and
    the Syntax block is the read-only YAML surface.
    """

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def _toggle_line(self, view: DialogView) -> Text:
        mark = "[x]" if view.toggle.checked else "[ ]"
        return Text.assemble(
            (f"{mark} ", "bold cyan"),
            (view.toggle.label, "white"),
            ("   (m to toggle)", "dim"),
        )

    def _surface(self, view: DialogView):
        # Failed renders are shown as the placeholder message, not as YAML
        if not view.render_ok:
            return Text(view.display.content, style="bold red")

        return Syntax(
            view.display.content,
            view.display.syntax_mode,
            theme=SYNTAX_THEMES[view.display.color_scheme],
            line_numbers=True,
            word_wrap=True,
        )

    def build(self, view: DialogView) -> Panel:
        """Composes the full dialog frame."""
        return Panel(
            Group(self._toggle_line(view), Text(""), self._surface(view)),
            title=Text(view.dialog.title, style="bold white"),
            subtitle=Text(f"{view.close_label} (q)", style="dim"),
            border_style="cyan" if view.render_ok else "red",
            expand=view.dialog.full_screen_capable,
        )

    def display(self, view: Optional[DialogView]):
        """Renders the dialog; a closed dialog renders nothing."""
        if view is None:
            return
        self.console.print(self.build(view))
