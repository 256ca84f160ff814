import pytest

from alcance.app.admin.service.upload import build_key, classify_file, folder_for_field
from alcance.app.common.exception.errors import ValidationException
from alcance.app.core.config import settings
from tests.conftest import auth_headers

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.mark.parametrize(
    "field, folder",
    [
        ("logo", "logos"),
        ("photo", "photos"),
        ("foto", "fotos"),
        ("testReport", "test-reports"),
        ("test-report", "test-reports"),
        ("file", "general"),
    ],
)
def test_folder_for_field(field, folder):
    assert folder_for_field(field) == folder


def test_classify_by_mime_or_extension():
    assert classify_file("foto.JPG", "application/octet-stream") == "image"
    assert classify_file("sin-extension", "image/webp") == "image"
    assert classify_file("informe.rar", "application/octet-stream") == "archive"
    assert classify_file("informe", "application/zip") == "archive"


def test_classify_rejects_other_types():
    with pytest.raises(ValidationException):
        classify_file("informe.pdf", "application/pdf")


def test_build_key_keeps_lowercase_extension():
    key = build_key("logos", "Logo.PNG")

    assert key.startswith("logos/")
    assert key.endswith(".png")
    assert build_key("logos", "Logo.PNG") != key


async def test_upload_single_file(client, admin_headers, blob_store):
    response = await client.post(
        "/api/upload",
        files={"logo": ("marca.png", PNG, "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["folder"] == "logos"
    assert body["originalName"] == "marca.png"
    assert body["size"] == len(PNG)
    assert body["url"] == f"https://{settings.s3_bucket_name}.s3.{settings.aws_region}.amazonaws.com/{body['key']}"
    assert blob_store.objects[body["key"]] == (PNG, "image/png")


async def test_upload_rejects_unsupported_type(client, admin_headers, blob_store):
    response = await client.post(
        "/api/upload",
        files={"photo": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert blob_store.objects == {}


async def test_upload_size_limit_depends_on_file_class(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "max_image_size", 10)

    image = await client.post(
        "/api/upload",
        files={"photo": ("grande.png", b"x" * 11, "image/png")},
        headers=admin_headers,
    )
    archive = await client.post(
        "/api/upload",
        files={"testReport": ("informe.zip", b"x" * 11, "application/zip")},
        headers=admin_headers,
    )

    assert image.status_code == 400
    assert archive.status_code == 200
    assert archive.json()["folder"] == "test-reports"


async def test_upload_requires_a_file(client, admin_headers):
    empty_form = await client.post("/api/upload", data={"campo": "valor"}, headers=admin_headers)
    not_multipart = await client.post("/api/upload", json={"logo": "x"}, headers=admin_headers)

    assert empty_form.status_code == 400
    assert not_multipart.status_code == 400


async def test_upload_multiple_files(client, admin_headers, blob_store):
    response = await client.post(
        "/api/upload/multiple",
        files=[
            ("photo", ("a.png", PNG, "image/png")),
            ("testReport", ("b.rar", b"Rar!", "application/x-rar-compressed")),
        ],
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["count"] == 2
    assert [f["folder"] for f in body["files"]] == ["photos", "test-reports"]
    assert len(blob_store.objects) == 2


async def test_upload_multiple_stores_nothing_when_one_file_is_invalid(
    client, admin_headers, blob_store, monkeypatch
):
    monkeypatch.setattr(settings, "max_image_size", 10)

    response = await client.post(
        "/api/upload/multiple",
        files=[
            ("photo", ("chica.png", b"x" * 5, "image/png")),
            ("photo", ("grande.png", b"x" * 50, "image/png")),
        ],
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert blob_store.objects == {}


async def test_upload_multiple_enforces_file_count(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_files", 2)

    response = await client.post(
        "/api/upload/multiple",
        files=[("photo", (f"{i}.png", PNG, "image/png")) for i in range(3)],
        headers=admin_headers,
    )

    assert response.status_code == 400


async def test_upload_is_admin_only(client, make_user):
    user = await make_user("cliente@example.com")

    anonymous = await client.post("/api/upload", files={"logo": ("a.png", PNG, "image/png")})
    forbidden = await client.post(
        "/api/upload",
        files={"logo": ("a.png", PNG, "image/png")},
        headers=auth_headers(user),
    )

    assert anonymous.status_code == 401
    assert forbidden.status_code == 403
