from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MedicalRecordOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: int
    file_name: str
    original_name: str
    file_type: str
    file_size: int
    download_url: str
    uploaded_at: datetime
    preview_url: str | None = None


class RecordResponse(BaseModel):
    message: str | None = None
    record: MedicalRecordOut


class RecordListResponse(BaseModel):
    records: list[MedicalRecordOut]


class MessageResponse(BaseModel):
    message: str
