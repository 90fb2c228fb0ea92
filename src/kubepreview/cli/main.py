#!/usr/bin/env python3
"""
KUBEPREVIEW CLI - Dry-Run Preview Viewer
----------------------------------------
Terminal front-end for the preview dialog: loads a dry-run result, opens a
PreviewSession on it and draws it with the PreviewFormatter. In interactive
mode the managed-fields switch can be flipped until the dialog is closed.

Author: KubePreview Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from kubepreview.cli.formatter import PreviewFormatter, console
from kubepreview.core.engine import PreviewSession
from kubepreview.core.models import ColorScheme
from kubepreview.preview.loader import LoaderError, load_dry_run_result

VERSION = "0.1.0"


class KubePreviewCLI:
    """
    CLI wrapper that turns user commands into PreviewSession actions.
    """

    def __init__(self, output: Optional[Console] = None):
        """Initializes the CLI and sets up the argument parser."""
        self.console = output or console
        self.parser = argparse.ArgumentParser(
            prog="kubepreview",
            description="KubePreview - Read-only YAML preview for Kubernetes dry-run results",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="Example: kubectl apply --dry-run=server -o json -f app.yaml | kubepreview show -",
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"kubepreview v{VERSION}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        show_parser = subparsers.add_parser("show", help="👁  Preview a dry-run result as YAML")
        show_parser.add_argument("path", help="Dry-run result file (YAML or JSON), or '-' for stdin")
        show_parser.add_argument("--show-managed-fields", action="store_true",
                                 help="Keep metadata.managedFields in the preview")
        show_parser.add_argument("--color-scheme", choices=[c.value for c in ColorScheme],
                                 default=ColorScheme.DARK.value, help="Syntax colours (default: dark)")
        show_parser.add_argument("--title", default=None, help="Dialog title (default: derived from the resource)")
        show_parser.add_argument("-i", "--interactive", action="store_true",
                                 help="Keep the preview open and toggle managed fields with 'm'")
        show_parser.add_argument("--verbose", action="store_true", help="Log pipeline activity")

    def _interactive_loop(self, session: PreviewSession, formatter: PreviewFormatter):
        """Redraws the dialog after every toggle until the user closes it."""
        while session.is_open:
            formatter.display(session.view())
            choice = self.console.input(
                "[bold yellow]m[/bold yellow] toggle managed fields, "
                "[bold yellow]q[/bold yellow] close: "
            ).strip().lower()

            if choice == "m":
                session.toggle_managed_fields()
            elif choice in ("q", ""):
                session.close()
            else:
                self.console.print(f"[dim]Unknown choice '{escape(choice)}'.[/dim]")

    def show(self, args: argparse.Namespace) -> int:
        try:
            item = load_dry_run_result(args.path)
        except LoaderError as e:
            self.console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1

        def on_close():
            if args.interactive:
                self.console.print("[dim]Preview closed.[/dim]")

        session = PreviewSession(
            item,
            title=args.title,
            on_close=on_close,
            hide_managed_fields=not args.show_managed_fields,
            color_scheme=ColorScheme(args.color_scheme),
        )
        formatter = PreviewFormatter(self.console)
        session.open()

        try:
            if args.interactive:
                self._interactive_loop(session, formatter)
            else:
                formatter.display(session.view())
        except (KeyboardInterrupt, EOFError):
            self.console.print()
        finally:
            session.close()
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        if args.command != "show":
            self.parser.print_help()
            return 0

        logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
        return self.show(args)


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubePreviewCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
