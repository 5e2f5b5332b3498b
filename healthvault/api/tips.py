import random

from fastapi import APIRouter

from healthvault.schemas import HealthTip, HealthTipResponse

router = APIRouter(prefix="/api", tags=["health-tips"])

HEALTH_TIPS = (
    HealthTip(
        id=1,
        title="Stay Hydrated",
        content=(
            "Drinking adequate water supports your body's natural detox processes and helps "
            "maintain healthy skin. Aim for 8-10 glasses daily."
        ),
        category="Nutrition",
    ),
    HealthTip(
        id=2,
        title="Regular Exercise",
        content=(
            "Just 30 minutes of moderate exercise daily can improve cardiovascular health and "
            "boost your mood through endorphin release."
        ),
        category="Fitness",
    ),
    HealthTip(
        id=3,
        title="Quality Sleep",
        content=(
            "Aim for 7-9 hours of sleep each night. Good sleep hygiene supports immune function "
            "and mental clarity."
        ),
        category="Sleep",
    ),
)


@router.get("/health-tips", response_model=HealthTipResponse)
def health_tip():
    return HealthTipResponse(tip=random.choice(HEALTH_TIPS))
