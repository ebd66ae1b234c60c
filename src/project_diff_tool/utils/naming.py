"""
Display naming utilities for delta types and descriptions.
"""

from functools import lru_cache
from typing import Optional


@lru_cache(maxsize=256)
def nicify_delta_type(name: str) -> str:
    """
    Convert a camelCase delta type tag to a display name.

    Examples:
        eventsAdded -> Events Added
        trackColour -> Track Colour
        timeSignaturesChangedOnTimeline -> Time Signatures Changed On Timeline
        MIDIChannel -> MIDI Channel

    Args:
        name: The delta type tag

    Returns:
        The display name
    """
    if not name:
        return ""

    result = []
    prev_char = None
    prev_was_upper = False

    for i, char in enumerate(name):
        is_upper = char.isupper()

        need_space = False
        if i > 0:
            # "trackColour" -> "track Colour"
            if is_upper and prev_char and prev_char.islower():
                need_space = True
            # "MIDIChannel" -> "MIDI Channel"
            elif is_upper and prev_was_upper:
                if i + 1 < len(name) and name[i + 1].islower():
                    need_space = True

        if need_space and result:
            result.append(" ")

        result.append(char.upper() if i == 0 else char)

        prev_char = char
        prev_was_upper = is_upper

    return "".join(result)


def format_description(text: str, count: Optional[int] = None) -> str:
    """
    Fill the "{x}" placeholder of a delta description.

    Examples:
        ("added {x} events", 3) -> "added 3 events"
        ("path changed", None) -> "path changed"
    """
    if count is None:
        return text
    return text.replace("{x}", str(count))
