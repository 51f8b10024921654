"""
Mars Photo API: Camera Classifier
===================================

What:  Maps instrument codes onto coarse camera categories and matches the
       `camera=` query filter against an instrument code.
How:   Prefix/substring rules on the uppercased code, checked in a fixed order.
Who:   Adapters call `matches()` to post-filter upstream records.

Rule order (first match wins):
    1. FHAZ  starts with FHAZ, or contains FRONT_HAZ / FRONT HAZ
    2. RHAZ  starts with RHAZ, or contains REAR_HAZ / REAR HAZ / READ_HAZ / READ HAZ
    3. MAST  starts with MAST

Front checks run before rear checks. "READ HAZ" is a misspelling that
shows up in upstream instrument labels and must still land in RHAZ.

Examples:
    category_of("FRONT_HAZCAM_LEFT_A")  → FHAZ
    category_of("READ_HAZ_LEFT")        → RHAZ
    category_of("MAST_LEFT")            → MAST
    category_of("NAVCAM")               → None
    matches("CHEMCAM_RMI", "CHEMCAM")   → True   (prefix match)
    matches("MAST_RIGHT", "mast")       → True   (category match)
"""

from typing import Optional

from mars_photos.models.rover import CameraCategory

_FRONT_HAZ_MARKERS = ("FRONT_HAZ", "FRONT HAZ")
_REAR_HAZ_MARKERS = ("REAR_HAZ", "REAR HAZ", "READ_HAZ", "READ HAZ")

_CATEGORY_NAMES = {category.value for category in CameraCategory}


def category_of(camera_name: Optional[str]) -> Optional[CameraCategory]:
    """Camera category for an instrument code, or None if it belongs to none."""
    if not camera_name:
        return None
    upper = camera_name.upper()

    if upper.startswith("FHAZ") or any(m in upper for m in _FRONT_HAZ_MARKERS):
        return CameraCategory.FHAZ

    if upper.startswith("RHAZ") or any(m in upper for m in _REAR_HAZ_MARKERS):
        return CameraCategory.RHAZ

    if upper.startswith("MAST"):
        return CameraCategory.MAST

    return None


def matches(camera_name: Optional[str], camera_filter: Optional[str]) -> bool:
    """
    Check whether an instrument satisfies the `camera=` filter.

    Args:
        camera_name:   Instrument code from the upstream record.
        camera_filter: User-supplied filter; None or "" matches everything.

    Returns:
        True if the filter is absent, if the filter names a category and the
        instrument belongs to it, or if the instrument code starts with the
        filter (case-insensitive).
    """
    if not camera_filter:
        return True

    filter_upper = camera_filter.strip().upper()
    if filter_upper in _CATEGORY_NAMES:
        return category_of(camera_name) == CameraCategory(filter_upper)

    return (camera_name or "").upper().startswith(filter_upper)
