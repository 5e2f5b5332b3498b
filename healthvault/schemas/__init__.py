from .auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserPublic
from .records import MedicalRecordOut, MessageResponse, RecordListResponse, RecordResponse
from .tips import HealthTip, HealthTipResponse
from .wellness import WellnessCreate, WellnessEntryOut, WellnessEntryResponse, WellnessListResponse

__all__ = [
    "AuthResponse",
    "HealthTip",
    "HealthTipResponse",
    "LoginRequest",
    "MedicalRecordOut",
    "MeResponse",
    "MessageResponse",
    "RecordListResponse",
    "RecordResponse",
    "RegisterRequest",
    "UserPublic",
    "WellnessCreate",
    "WellnessEntryOut",
    "WellnessEntryResponse",
    "WellnessListResponse",
]
