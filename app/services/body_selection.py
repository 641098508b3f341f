# services/body_selection.py
"""
Body-map selection transitions.

A selection is an ordered tuple of ``SelectedRegion`` with at most one entry
per region. Every function here is pure: it takes a selection and returns a
new one, leaving every other region's entry (and its position) untouched.
"""
from typing import Tuple

from app.core.exceptions import ValidationError
from app.data.body_regions import BodyRegion, RegionGroup, Side, region_group
from app.schemas.pain_report import SelectedRegion

Selection = Tuple[SelectedRegion, ...]

_OPPOSITE = {Side.LEFT: Side.RIGHT, Side.RIGHT: Side.LEFT}


def _find(selection: Selection, region_id: BodyRegion) -> int:
    for index, entry in enumerate(selection):
        if entry.region_id == region_id:
            return index
    return -1


def _replace(selection: Selection, index: int, entry: SelectedRegion) -> Selection:
    return selection[:index] + (entry,) + selection[index + 1:]


def _drop(selection: Selection, index: int) -> Selection:
    return selection[:index] + selection[index + 1:]


def toggle(selection: Selection, region_id: BodyRegion, clicked_side: Side) -> Selection:
    """
    Apply one click on the body map.

    Args:
        selection: Current ordered selection
        region_id: Region that was clicked
        clicked_side: Half that was clicked (left/right), or center

    Returns:
        The new selection

    Raises:
        ValidationError: If the side can not come from a click on this region
    """
    region_id = BodyRegion(region_id)
    clicked_side = Side(clicked_side)

    if region_group(region_id) == RegionGroup.CENTER:
        clicked_side = Side.CENTER
    elif clicked_side not in _OPPOSITE:
        raise ValidationError(
            f"'{region_id.value}' must be clicked on its left or right side, not '{clicked_side.value}'"
        )

    index = _find(selection, region_id)
    if index == -1:
        return selection + (SelectedRegion(region_id=region_id, side=clicked_side),)

    if clicked_side == Side.CENTER:
        return _drop(selection, index)

    existing = selection[index].side
    if existing == clicked_side:
        return _drop(selection, index)
    if existing == Side.BOTH:
        # Clicking one half while both are lit leaves only the other half.
        side = _OPPOSITE[clicked_side]
    else:
        side = Side.BOTH
    return _replace(selection, index, SelectedRegion(region_id=region_id, side=side))


def remove(selection: Selection, region_id: BodyRegion) -> Selection:
    """Drop a region's entry regardless of its side."""
    region_id = BodyRegion(region_id)
    return tuple(entry for entry in selection if entry.region_id != region_id)


def reset() -> Selection:
    return ()
