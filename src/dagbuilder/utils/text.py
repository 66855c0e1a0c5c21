from __future__ import annotations


def normalize_label(label: str) -> str:
    """
    Trims surrounding whitespace from a node label.

    Interior whitespace is user content and left untouched.
    """
    if not isinstance(label, str):
        return ""
    return label.strip()
