"""Tests for multipart uploads and media deletion."""

import io

import pytest
import responses

from folio._exceptions import AuthenticationError, ValidationError
from folio._http import buffer_file
from tests.conftest import BASE
from tests.utils.factories import envelope, uploaded_data


@pytest.mark.unit
class TestUploadHeaders:
    @responses.activate
    def test_multipart_content_type_left_to_requests(self, client):
        responses.add(
            responses.POST, f"{BASE}/upload/single", json=envelope(uploaded_data()), status=201
        )

        result = client.uploads.upload(("shot.png", b"\x89PNG data"), folder="projects")

        request = responses.calls[0].request
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert request.headers["Authorization"] == "Bearer tok_old"
        assert b'name="folder"' in request.body
        assert b"projects" in request.body
        assert b'name="file"; filename="shot.png"' in request.body
        assert result.data.public_id == "projects/shot"
        assert result.data.width == 800

    @responses.activate
    def test_default_folder(self, client):
        responses.add(responses.POST, f"{BASE}/upload/single", json=envelope(uploaded_data()))
        client.uploads.upload(b"raw")
        body = responses.calls[0].request.body
        assert b"general" in body
        assert b'filename="upload"' in body

    @responses.activate
    def test_upload_many_repeats_field(self, client):
        responses.add(
            responses.POST,
            f"{BASE}/upload/multiple",
            json=envelope([uploaded_data("a"), uploaded_data("b")]),
        )

        result = client.uploads.upload_many(
            [("a.png", b"aaa"), ("b.png", io.BytesIO(b"bbb"))], folder="projects"
        )

        body = responses.calls[0].request.body
        assert body.count(b'name="files"') == 2
        assert [f.public_id for f in result.data] == ["a", "b"]

    @responses.activate
    def test_json_requests_keep_json_content_type(self, client):
        responses.add(responses.GET, f"{BASE}/projects", json=envelope([]))
        client.projects.list()
        assert responses.calls[0].request.headers["Content-Type"] == "application/json"


@pytest.mark.unit
class TestUploadFailures:
    @responses.activate
    def test_oversized_upload_surfaced(self, client):
        responses.add(
            responses.POST,
            f"{BASE}/upload/single",
            json={"success": False, "message": "File too large"},
            status=413,
        )

        with pytest.raises(ValidationError) as exc_info:
            client.uploads.upload(("big.png", b"\0" * (15 * 1024 * 1024)))

        assert exc_info.value.status_code == 413
        assert exc_info.value.message == "File too large"
        assert len(responses.calls) == 1

    @responses.activate
    def test_replay_after_refresh_resends_same_bytes(self, client):
        url = f"{BASE}/upload/single"
        responses.add(responses.POST, url, json={"error": "Token expired"}, status=401)
        responses.add(responses.POST, f"{BASE}/auth/refresh", json={"token": "tok_new"})
        responses.add(responses.POST, url, json=envelope(uploaded_data()))

        client.uploads.upload(io.BytesIO(b"stream-content"))

        first, replay = responses.calls[0].request, responses.calls[2].request
        assert b"stream-content" in replay.body
        assert replay.headers["Authorization"] == "Bearer tok_new"
        assert "multipart/form-data" in replay.headers["Content-Type"]
        assert first.body.count(b"stream-content") == replay.body.count(b"stream-content")

    @responses.activate
    def test_upload_login_required(self, client):
        url = f"{BASE}/upload/single"
        responses.add(responses.POST, url, json={"error": "Token expired"}, status=401)
        responses.add(responses.POST, f"{BASE}/auth/refresh", status=401)

        with pytest.raises(AuthenticationError):
            client.uploads.upload(b"data")

        assert client.token is None


@pytest.mark.unit
class TestDelete:
    @responses.activate
    def test_public_id_slash_encoded(self, client):
        responses.add(
            responses.DELETE, f"{BASE}/upload/projects%2Fshot", json=envelope(message="Deleted")
        )

        result = client.uploads.delete("projects/shot")

        assert responses.calls[0].request.url == f"{BASE}/upload/projects%2Fshot"
        assert result.message == "Deleted"


@pytest.mark.unit
class TestBufferFile:
    def test_path(self, tmp_path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"jpeg")
        assert buffer_file(path) == ("photo.jpg", b"jpeg", "image/jpeg")
        assert buffer_file(str(path)) == ("photo.jpg", b"jpeg", "image/jpeg")

    def test_file_object_uses_its_name(self, tmp_path):
        path = tmp_path / "doc.pdf"
        path.write_bytes(b"pdf")
        with open(path, "rb") as f:
            assert buffer_file(f) == ("doc.pdf", b"pdf", "application/pdf")

    def test_tuple_with_explicit_type(self):
        assert buffer_file(("x.bin", b"1", "image/png")) == ("x.bin", b"1", "image/png")

    def test_unknown_extension(self):
        assert buffer_file(("blob", b"1"))[2] == "application/octet-stream"
