from typing import List
from fastapi import APIRouter, Depends

from app.core.security import get_current_identity
from app.data.body_regions import REGION_REPOSITORY, BodyRegion, valid_sides
from app.schemas import Identity, RegionRead, SelectedRegion, ToggleRequest
from app.services import session_state
from app.services.session_state import session_registry


router = APIRouter(prefix="/body-map", tags=["Body Map"])


@router.get("/regions", response_model=List[RegionRead])
def list_regions():
    """All selectable regions with their group and allowed sides."""
    return [
        RegionRead(
            id=region["id"],
            label=region["label"],
            group=region["group"].value,
            sides=valid_sides(region["id"]),
        )
        for region in REGION_REPOSITORY
    ]


@router.get("/selection", response_model=List[SelectedRegion])
def get_selection(identity: Identity = Depends(get_current_identity)):
    return list(session_registry.get(identity).selection)


@router.post("/toggle", response_model=List[SelectedRegion])
def toggle_region(
    request: ToggleRequest,
    identity: Identity = Depends(get_current_identity),
):
    """Apply one click on the body map.

    - new region: selected on the clicked side
    - same side again: deselected
    - opposite side: becomes `both`
    - either side while `both`: only the other side stays
    - center regions (back, waist) toggle on/off
    """
    state = session_registry.update(
        identity, session_state.toggle_region, request.region_id, request.side
    )
    return list(state.selection)


@router.delete("/selection/{region_id}", response_model=List[SelectedRegion])
def remove_region(
    region_id: BodyRegion,
    identity: Identity = Depends(get_current_identity),
):
    state = session_registry.update(identity, session_state.remove_region, region_id)
    return list(state.selection)


@router.post("/reset", response_model=List[SelectedRegion])
def reset_selection(identity: Identity = Depends(get_current_identity)):
    """Clear the selection and any pain records already answered."""
    state = session_registry.update(identity, session_state.reset_all)
    return list(state.selection)
