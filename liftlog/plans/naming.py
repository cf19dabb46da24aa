"""Rollover name versioning.

A plan name may end in a version marker "(#N)". Rolling over bumps N, or
appends "(#2)" when there is no marker.
"""

import re

# Only a marker at the very end of the name counts
_VERSION_MARKER = re.compile(r"\(#(\d+)\)\s*\Z")

FIRST_ROLLOVER_VERSION = 2


def split_version(name: str) -> tuple[str, int | None]:
    """Split a plan name into (base name, version).

    Returns:
        Trimmed base name and the trailing version, or None when the name
        has no well-formed trailing marker
    """
    match = _VERSION_MARKER.search(name)
    if match is None:
        return name.strip(), None
    return name[: match.start()].strip(), int(match.group(1))


def next_version_name(name: str) -> str:
    """Derive the successor name used by rollover.

    Examples:
        "Push Day" -> "Push Day (#2)"
        "Push Day (#2)" -> "Push Day (#3)"
        "Push (#2) Day" -> "Push (#2) Day (#2)"
    """
    base, version = split_version(name)
    next_version = version + 1 if version is not None else FIRST_ROLLOVER_VERSION
    return f"{base} (#{next_version})"
