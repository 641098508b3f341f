# app/data/body_regions.py
from enum import Enum
from typing import Dict, List, Any


# =====================================================================
# ENUMS
# =====================================================================

class BodyRegion(str, Enum):
    """The nine anatomical regions on the body map."""
    NECK = "neck"
    SHOULDER = "shoulder"
    BACK = "back"
    WAIST = "waist"
    ELBOW = "elbow"
    HAND_WRIST = "hand_wrist"
    HIP_THIGH = "hip_thigh"
    KNEE = "knee"
    ANKLE_FOOT = "ankle_foot"


class RegionGroup(str, Enum):
    """Center regions are single and unsided; bilateral ones have left/right halves."""
    CENTER = "center"
    BILATERAL = "bilateral"


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"
    CENTER = "center"


# =====================================================================
# REGION REPOSITORY
# =====================================================================

REGION_REPOSITORY: List[Dict[str, Any]] = [
    {"id": BodyRegion.NECK, "label": "Neck", "group": RegionGroup.BILATERAL},
    {"id": BodyRegion.SHOULDER, "label": "Shoulder", "group": RegionGroup.BILATERAL},
    {"id": BodyRegion.BACK, "label": "Back", "group": RegionGroup.CENTER},
    {"id": BodyRegion.WAIST, "label": "Waist", "group": RegionGroup.CENTER},
    {"id": BodyRegion.ELBOW, "label": "Elbow", "group": RegionGroup.BILATERAL},
    {"id": BodyRegion.HAND_WRIST, "label": "Hand/Wrist", "group": RegionGroup.BILATERAL},
    {"id": BodyRegion.HIP_THIGH, "label": "Hip/Thigh", "group": RegionGroup.BILATERAL},
    {"id": BodyRegion.KNEE, "label": "Knee", "group": RegionGroup.BILATERAL},
    {"id": BodyRegion.ANKLE_FOOT, "label": "Ankle/Foot", "group": RegionGroup.BILATERAL},
]

_REGIONS_BY_ID = {entry["id"]: entry for entry in REGION_REPOSITORY}

SIDE_LABELS: Dict[Side, str] = {
    Side.LEFT: "Left",
    Side.RIGHT: "Right",
    Side.BOTH: "Both",
    Side.CENTER: "Center",
}


def region_group(region_id: BodyRegion) -> RegionGroup:
    return _REGIONS_BY_ID[BodyRegion(region_id)]["group"]


def region_label(region_id: BodyRegion) -> str:
    return _REGIONS_BY_ID[BodyRegion(region_id)]["label"]


def valid_sides(region_id: BodyRegion) -> List[Side]:
    """Sides a stored selection entry may carry for this region."""
    if region_group(region_id) == RegionGroup.CENTER:
        return [Side.CENTER]
    return [Side.LEFT, Side.RIGHT, Side.BOTH]
