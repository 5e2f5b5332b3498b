from dataclasses import asdict

from fastapi import APIRouter, Depends

from healthvault.api.deps import get_current_user, get_storage
from healthvault.schemas import WellnessCreate, WellnessEntryOut, WellnessEntryResponse, WellnessListResponse
from healthvault.storage import NewWellnessEntry, Storage, User

router = APIRouter(prefix="/api/wellness", tags=["wellness"])


@router.post("", response_model=WellnessEntryResponse, status_code=201)
def submit_mood(
    body: WellnessCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    entry = storage.create_wellness_entry(user.id, NewWellnessEntry(mood=body.mood, notes=body.notes))
    return WellnessEntryResponse(
        message="Wellness entry created successfully",
        entry=WellnessEntryOut(**asdict(entry)),
    )


@router.get("", response_model=WellnessListResponse)
def list_entries(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Mood history, newest first."""
    entries = storage.list_wellness_entries(user.id)
    return WellnessListResponse(entries=[WellnessEntryOut(**asdict(e)) for e in entries])
