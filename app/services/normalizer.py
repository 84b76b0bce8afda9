"""Filename normalisation for stored uploads."""

import re
import unicodedata
from pathlib import PurePath


def safe_filename(original: str, default: str = "file") -> str:
    """Reduce a client-supplied filename to a safe basename.

    Directory components are dropped, unicode is folded to ASCII, runs of
    whitespace become ``_`` and any other character outside
    ``[A-Za-z0-9._-]`` is removed.
    """
    # Browsers on Windows may send the full client path
    name = PurePath(original.replace("\\", "/")).name

    name = unicodedata.normalize("NFKD", name)
    name = name.encode("ascii", "ignore").decode("ascii")

    name = re.sub(r"\s+", "_", name.strip())
    name = re.sub(r"[^A-Za-z0-9._-]", "", name)
    name = name.lstrip(".")

    return name or default


def safe_extension(original: str) -> str:
    """Return the lowercase extension of *original* (``".jpg"``), or ``""``."""
    suffix = PurePath(safe_filename(original)).suffix.lower()
    return suffix if re.fullmatch(r"\.[a-z0-9]{1,10}", suffix) else ""
