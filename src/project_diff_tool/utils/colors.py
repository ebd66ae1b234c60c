"""
Diff status symbols.
"""

# Status symbols for summaries, keyed by DiffStatus value
DIFF_SYMBOLS = {
    "added": "+",
    "removed": "−",
    "modified": "●",
    "unchanged": "",
}
