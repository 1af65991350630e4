# rivals_scout/names.py
"""
Turn raw OCR output into candidate player handles.
"""

from typing import List


def extract_candidate_handles(raw_text: str) -> List[str]:
    """
    Split recognized text into trimmed, non-empty lines.

    Order of appearance is preserved and duplicates are kept; the tracker
    site decides whether a handle is real.

    Args:
        raw_text: Text returned by the OCR engine (may be empty or None)

    Returns:
        List of candidate handles

    Examples:
        >>> extract_candidate_handles("Alice\\n\\nBob \\n")
        ['Alice', 'Bob']
    """
    if not raw_text:
        return []
    lines = raw_text.split('\n')
    return [line.strip() for line in lines if line.strip()]
