"""Medical records: upload validation, owner-scoped listing, fetch and delete."""
from fastapi.testclient import TestClient

from healthvault.core.config import settings
from healthvault.files import InMemoryFileStore
from healthvault.main import create_app
from healthvault.storage import MemoryStorage

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\n%%EOF\n"
JPG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def _upload(client: TestClient, headers: dict, name="scan.pdf", content=PDF_BYTES, mime="application/pdf"):
    return client.post("/api/medical-records", files={"file": (name, content, mime)}, headers=headers)


def test_upload_pdf(client: TestClient, auth_headers: dict, file_store):
    r = _upload(client, auth_headers)
    assert r.status_code == 201
    record = r.json()["record"]
    assert record["originalName"] == "scan.pdf"
    assert record["fileType"] == "application/pdf"
    assert record["fileSize"] == len(PDF_BYTES)
    assert record["fileName"].startswith("file-") and record["fileName"].endswith(".pdf")
    assert record["downloadUrl"] == f"/uploads/{record['fileName']}"
    assert record["previewUrl"] == record["downloadUrl"]
    assert "uploadedAt" in record and "userId" in record
    assert file_store.read(record["fileName"]) == PDF_BYTES


def test_upload_jpg(client: TestClient, auth_headers: dict):
    r = _upload(client, auth_headers, name="xray.jpg", content=JPG_BYTES, mime="image/jpeg")
    assert r.status_code == 201
    assert r.json()["record"]["fileType"] == "image/jpeg"


def test_upload_requires_auth(client: TestClient, file_store):
    r = client.post("/api/medical-records", files={"file": ("scan.pdf", PDF_BYTES, "application/pdf")})
    assert r.status_code == 401
    assert file_store.stored_files == {}


def test_upload_without_file(client: TestClient, auth_headers: dict):
    r = client.post("/api/medical-records", data={"description": "no file"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "No file uploaded"


def test_upload_disallowed_type(client: TestClient, auth_headers: dict, storage, file_store):
    for name, mime in (("notes.txt", "text/plain"), ("scan.png", "image/png"), ("scan.pdf", "text/html")):
        r = _upload(client, auth_headers, name=name, content=b"hello", mime=mime)
        assert r.status_code == 400, (name, mime)
        assert r.json()["message"] == "Only PDF and JPG files are allowed"
    me = client.get("/api/auth/me", headers=auth_headers).json()["user"]
    assert storage.list_medical_records(me["id"]) == []
    assert file_store.stored_files == {}


def test_upload_too_large(client: TestClient, auth_headers: dict, storage, file_store):
    six_mb = b"%PDF" + b"0" * (6 * 1024 * 1024)
    r = _upload(client, auth_headers, content=six_mb)
    assert r.status_code == 400
    assert "5MB" in r.json()["message"]
    me = client.get("/api/auth/me", headers=auth_headers).json()["user"]
    assert storage.list_medical_records(me["id"]) == []
    assert file_store.stored_files == {}


def test_upload_at_limit_is_accepted(client: TestClient, auth_headers: dict):
    exactly = b"%PDF" + b"0" * (settings.upload_max_bytes - 4)
    r = _upload(client, auth_headers, content=exactly)
    assert r.status_code == 201
    assert r.json()["record"]["fileSize"] == settings.upload_max_bytes


def test_upload_empty_file(client: TestClient, auth_headers: dict, file_store):
    r = _upload(client, auth_headers, content=b"")
    assert r.status_code == 400
    assert file_store.stored_files == {}


def test_list_records_newest_first(client: TestClient, auth_headers: dict):
    assert client.get("/api/medical-records", headers=auth_headers).json() == {"records": []}
    first = _upload(client, auth_headers, name="first.pdf").json()["record"]
    second = _upload(client, auth_headers, name="second.pdf").json()["record"]
    r1 = client.get("/api/medical-records", headers=auth_headers)
    r2 = client.get("/api/medical-records", headers=auth_headers)
    assert r1.status_code == 200
    ids = [rec["id"] for rec in r1.json()["records"]]
    assert ids == [second["id"], first["id"]]
    assert r1.json() == r2.json()


def test_records_are_owner_scoped(client: TestClient, auth_headers: dict, other_headers: dict):
    _upload(client, auth_headers)
    r = client.get("/api/medical-records", headers=other_headers)
    assert r.status_code == 200
    assert r.json()["records"] == []


def test_get_record(client: TestClient, auth_headers: dict, other_headers: dict):
    record = _upload(client, auth_headers).json()["record"]
    own = client.get(f"/api/medical-records/{record['id']}", headers=auth_headers)
    assert own.status_code == 200
    assert own.json()["record"]["id"] == record["id"]
    foreign = client.get(f"/api/medical-records/{record['id']}", headers=other_headers)
    assert foreign.status_code == 404
    missing = client.get("/api/medical-records/999", headers=auth_headers)
    assert missing.status_code == 404
    assert foreign.json()["message"] == missing.json()["message"]


def test_delete_record(client: TestClient, auth_headers: dict, file_store):
    record = _upload(client, auth_headers).json()["record"]
    r = client.delete(f"/api/medical-records/{record['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Record deleted successfully"}
    assert record["fileName"] not in file_store.stored_files
    assert client.get("/api/medical-records", headers=auth_headers).json()["records"] == []
    again = client.delete(f"/api/medical-records/{record['id']}", headers=auth_headers)
    assert again.status_code == 404


def test_delete_other_users_record(client: TestClient, auth_headers: dict, other_headers: dict, file_store):
    record = _upload(client, other_headers).json()["record"]
    r = client.delete(f"/api/medical-records/{record['id']}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Record not found"
    still_there = client.get("/api/medical-records", headers=other_headers).json()["records"]
    assert [rec["id"] for rec in still_there] == [record["id"]]
    assert record["fileName"] in file_store.stored_files


def test_non_numeric_record_id(client: TestClient, auth_headers: dict):
    assert client.get("/api/medical-records/abc", headers=auth_headers).status_code == 404
    assert client.delete("/api/medical-records/abc", headers=auth_headers).status_code == 404


def test_out_of_range_record_id(client: TestClient, auth_headers: dict):
    _upload(client, auth_headers)
    for raw in (str(2**63), "9" * 40):
        r = client.get(f"/api/medical-records/{raw}", headers=auth_headers)
        assert r.status_code == 404, raw
        assert r.json()["message"] == "Record not found"
        assert client.delete(f"/api/medical-records/{raw}", headers=auth_headers).status_code == 404
    assert len(client.get("/api/medical-records", headers=auth_headers).json()["records"]) == 1


class _BrokenStorage(MemoryStorage):
    def create_medical_record(self, owner_id, metadata):
        raise RuntimeError("disk on fire")


def test_storage_failure_is_generic_500():
    file_store = InMemoryFileStore()
    app = create_app(settings, storage=_BrokenStorage(), file_store=file_store)
    with TestClient(app) as c:
        token = c.post(
            "/api/auth/register",
            json={"username": "ann", "email": "a@x.com", "password": "secret1"},
        ).json()["token"]
        r = c.post(
            "/api/medical-records",
            files={"file": ("scan.pdf", PDF_BYTES, "application/pdf")},
            headers={"Authorization": f"Bearer {token}"},
        )
    assert r.status_code == 500
    assert r.json()["message"] == "Upload failed"
    assert "disk on fire" not in r.text
    assert file_store.stored_files == {}
