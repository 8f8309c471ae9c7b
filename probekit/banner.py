"""Start-up banner and version."""

from __future__ import annotations

import sys

VERSION = "v1.3.6"

BANNER = r"""
                 __        __   _ __
   ___  _______ / /  ___  / /__(_) /_
  / _ \/ __/ _ \/ _ \/ -_)/  '_/ / __/
 / .__/_/  \___/_.__/\__//_/\_\/_/\__/
/_/
"""


def _banner_text() -> str:
    """Return the banner followed by the version line."""
    return f"{BANNER}\n\t\t{VERSION}\n\n"


def show_banner() -> str:
    """Write the banner and version to standard error and return the text written."""
    text = _banner_text()
    stream = sys.stderr
    stream.write(text)
    stream.flush()
    return text