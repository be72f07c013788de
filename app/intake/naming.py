"""
app/intake/naming.py

Generates the server-side name an accepted file is stored under.
"""

from __future__ import annotations

import os
import time
import uuid
from typing import Optional


def original_suffix(filename: str) -> str:
    """Extension of ``filename`` including the dot, case preserved ("" if none)."""
    return os.path.splitext(filename)[1]


def generate_stored_name(
    original_filename: str,
    *,
    now_ms: Optional[int] = None,
    uid: Optional[uuid.UUID] = None,
) -> str:
    """
    Return ``<uuid4>-<epoch millis><ext>`` for ``original_filename``.

    The uuid keeps names distinct even within the same millisecond; the
    extension is kept verbatim ("photo.JPG" → "...-1700000000000.JPG").
    ``now_ms`` and ``uid`` exist for tests.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    if uid is None:
        uid = uuid.uuid4()
    return f"{uid}-{now_ms}{original_suffix(original_filename)}"
