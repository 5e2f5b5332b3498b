from .medical_record import MedicalRecord
from .user import User
from .wellness_entry import WellnessEntry

__all__ = [
    "MedicalRecord",
    "User",
    "WellnessEntry",
]
