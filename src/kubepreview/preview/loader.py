#!/usr/bin/env python3
"""
KUBEPREVIEW LOADER
------------------
Reads a dry-run result as produced by
`kubectl apply --dry-run=server -o yaml` (or `-o json`). JSON is a subset
of YAML, so a single safe ruamel parser covers both.

Author: KubePreview Team
Date: 2026-10-19
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from ruamel.yaml import YAML, YAMLError

logger = logging.getLogger("kubepreview.loader")


class LoaderError(Exception):
    """The dry-run result could not be read or parsed."""
    pass


def parse_dry_run_result(raw_text: str, source: str = "<string>") -> Any:
    """Returns the first non-empty document in `raw_text`."""
    yaml_parser = YAML(typ='safe')
    try:
        docs = [doc for doc in yaml_parser.load_all(raw_text) if doc is not None]
    except YAMLError as e:
        raise LoaderError(f"{source} is not valid YAML/JSON: {e}") from e

    if not docs:
        raise LoaderError(f"{source} contains no document")
    if len(docs) > 1:
        logger.warning(f"{source} holds {len(docs)} documents; previewing the first one")
    return docs[0]


def load_dry_run_result(path: Union[str, Path], stdin: Optional[TextIO] = None) -> Any:
    """
    Loads a dry-run result from `path`, or from stdin when `path` is '-'.
    """
    if str(path) == "-":
        stream = stdin or sys.stdin
        return parse_dry_run_result(stream.read(), source="<stdin>")

    full_path = Path(path)
    if not full_path.is_file():
        raise LoaderError(f"Path '{path}' not found.")

    try:
        # BOM-aware read, same as manifests saved by Windows editors
        raw_text = full_path.read_text(encoding='utf-8-sig')
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"Unable to read {path}: {e}") from e

    logger.info(f"Loaded dry-run result from {full_path}")
    return parse_dry_run_result(raw_text, source=str(path))
