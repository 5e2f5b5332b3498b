import logging
from dataclasses import asdict
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile

from healthvault.api.deps import get_current_user, get_file_store, get_settings, get_storage
from healthvault.core.config import Settings
from healthvault.core.errors import AppError, InternalError, NotFound, ValidationError
from healthvault.files import FileStore, download_url, generate_file_name
from healthvault.schemas import MedicalRecordOut, MessageResponse, RecordListResponse, RecordResponse
from healthvault.storage import MedicalRecord, NewMedicalRecord, Storage, User

log = logging.getLogger("healthvault.records")

router = APIRouter(prefix="/api/medical-records", tags=["medical-records"])

ALLOWED_UPLOAD_EXTENSIONS = {".pdf", ".jpg", ".jpeg"}
ALLOWED_UPLOAD_TYPES = {"application/pdf", "image/jpeg", "image/jpg"}
READ_CHUNK_BYTES = 64 * 1024
RECORD_NOT_FOUND = "Record not found"
# largest id a 64-bit INTEGER column can hold
MAX_RECORD_ID = 2**63 - 1


def _record_out(record: MedicalRecord) -> MedicalRecordOut:
    return MedicalRecordOut(**asdict(record), preview_url=download_url(record.file_name))


def _parse_record_id(raw: str) -> int:
    # Non-numeric ids cannot exist, so they get the same 404 as any other miss
    if not (raw.isascii() and raw.isdigit()):
        raise NotFound(RECORD_NOT_FOUND)
    record_id = int(raw)
    if record_id > MAX_RECORD_ID:
        raise NotFound(RECORD_NOT_FOUND)
    return record_id


def validate_upload_meta(filename: str | None, content_type: str | None) -> str:
    """Checks name and declared type; returns the normalised MIME type."""
    if not filename:
        raise ValidationError("No file uploaded")
    ext = Path(filename).suffix.lower()
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if ext not in ALLOWED_UPLOAD_EXTENSIONS or mime not in ALLOWED_UPLOAD_TYPES:
        raise ValidationError("Only PDF and JPG files are allowed")
    return mime


async def read_limited(file: UploadFile, max_bytes: int) -> bytes:
    """Reads the upload, stopping as soon as it grows past ``max_bytes``."""
    content = bytearray()
    while True:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        content.extend(chunk)
        if len(content) > max_bytes:
            raise ValidationError(f"File size must be less than {max_bytes // (1024 * 1024)}MB")
    if not content:
        raise ValidationError("File is empty")
    return bytes(content)


@router.post("", response_model=RecordResponse, status_code=201)
async def upload_record(
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    file_store: FileStore = Depends(get_file_store),
    settings: Settings = Depends(get_settings),
):
    """Multipart upload, field name 'file'. Nothing is stored unless the file passes validation."""
    if file is None:
        raise ValidationError("No file uploaded")
    mime = validate_upload_meta(file.filename, file.content_type)
    content = await read_limited(file, settings.upload_max_bytes)
    original_name = Path(file.filename).name
    file_name = generate_file_name(original_name)
    log.info("upload: user_id=%s size=%s type=%s", user.id, len(content), mime)
    try:
        file_store.save(file_name, content)
    except OSError as e:
        log.exception("upload: file write failed: %s", e)
        raise InternalError("Upload failed")
    try:
        record = storage.create_medical_record(
            user.id,
            NewMedicalRecord(
                file_name=file_name,
                original_name=original_name,
                file_type=mime,
                file_size=len(content),
                download_url=download_url(file_name),
            ),
        )
    except AppError:
        file_store.delete(file_name)
        raise
    except Exception as e:
        file_store.delete(file_name)
        log.exception("upload: record create failed: %s", e)
        raise InternalError("Upload failed")
    return RecordResponse(message="File uploaded successfully", record=_record_out(record))


@router.get("", response_model=RecordListResponse)
def list_records(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    records = storage.list_medical_records(user.id)
    return RecordListResponse(records=[_record_out(r) for r in records])


@router.get("/{record_id}", response_model=RecordResponse, response_model_exclude_none=True)
def get_record(
    record_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    record = storage.get_medical_record(_parse_record_id(record_id), user.id)
    if not record:
        raise NotFound(RECORD_NOT_FOUND)
    return RecordResponse(record=_record_out(record))


@router.delete("/{record_id}", response_model=MessageResponse)
def delete_record(
    record_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    file_store: FileStore = Depends(get_file_store),
):
    rid = _parse_record_id(record_id)
    record = storage.get_medical_record(rid, user.id)
    if not record or not storage.delete_medical_record(rid, user.id):
        raise NotFound(RECORD_NOT_FOUND)
    try:
        file_store.delete(record.file_name)
    except (OSError, ValueError) as e:
        # record already deleted; the file is left orphaned
        log.warning("delete: file removal failed for %s: %s", record.file_name, e)
    return MessageResponse(message="Record deleted successfully")
