#!/usr/bin/env python3
"""
Root confinement for caller-supplied relative paths.

Paths are resolved lexically (symlinks are not followed) against the
configured root, and anything that lands outside it is rejected.
"""

import os
from pathlib import PurePosixPath
from typing import Union

from .errors import PathTraversalError


def normalize_rel(rel_path: Union[str, None]) -> str:
    """
    Normalize a relative path to forward slashes without leading/trailing slashes.

    ``None``, ``""`` and ``"."`` all mean the root and normalize to ``""``.
    """
    if rel_path in (None, "", "."):
        return ""
    normalized = str(rel_path).replace("\\", "/")
    parts = [p for p in PurePosixPath(normalized).parts if p not in ("", "/", ".")]
    return "/".join(parts)


def safe_join(root: Union[str, os.PathLike], rel_path: Union[str, None] = "") -> str:
    """
    Resolve ``rel_path`` under ``root`` and return the absolute path.

    Raises:
        PathTraversalError: if the resolved path is not the root or inside it
    """
    root_abs = os.path.abspath(os.fspath(root))
    target = os.path.abspath(os.path.join(root_abs, str(rel_path or "")))
    try:
        rel_to_root = os.path.relpath(target, root_abs)
    except ValueError:
        # Different drive on Windows
        raise PathTraversalError(str(rel_path)) from None
    if rel_to_root == os.pardir or rel_to_root.startswith(os.pardir + os.sep) or os.path.isabs(rel_to_root):
        raise PathTraversalError(str(rel_path))
    return target
