"""
app/intake/classifier.py

Picks the storage sub-directory for a file from its declared content-type.
"""

from app.core.constants import DOCUMENTS_FOLDER, IMAGES_FOLDER


def classify_folder(content_type: str) -> str:
    """
    Return the destination folder for ``content_type``.

    Rules, first match wins:
      1. ``image/...``                     → images
      2. contains "pdf" or "document"      → documents
      3. anything else                     → documents

    Spreadsheets therefore land in documents too. The reports folder is
    never chosen here.
    """
    if content_type.startswith("image/"):
        return IMAGES_FOLDER
    if "pdf" in content_type or "document" in content_type:
        return DOCUMENTS_FOLDER
    return DOCUMENTS_FOLDER
