import io

from import_engine.importer import Upserter
from services import CommitError, count

CSV = (
    b"postId,id,name,email,body\n"
    b"1,1,Valid,VALID@example.com,Body\n"
    b"2,2,Invalid,not-email,Body\n"
    b"3,3,Also valid,ok@example.com,Body\n"
)


def _upload(client, content=CSV, filename="comments.csv"):
    return client.post(
        "/api/v1/upload",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


class TestUpload:

    def test_upload_reports_stats(self, client, db):
        response = _upload(client)
        assert response.status_code == 201
        body = response.get_json()
        assert body["success"] is True
        assert body["stats"] == {
            "totalRows": 3,
            "successfulRows": 2,
            "failedRows": 1,
            "errors": [{"row": 2, "reason": "Invalid email format"}],
        }
        assert count(db) == 2

    def test_raw_body_upload(self, client, db):
        response = client.post("/api/v1/upload", data=CSV, content_type="text/csv")
        assert response.status_code == 201
        assert count(db) == 2

    def test_no_file(self, client):
        response = client.post("/api/v1/upload", data={"note": "x"}, content_type="multipart/form-data")
        assert response.status_code == 400
        assert response.get_json() == {"success": False, "error": "No file uploaded"}

    def test_rejects_non_csv(self, client):
        response = _upload(client, filename="notes.txt")
        assert response.status_code == 400
        assert "CSV" in response.get_json()["error"]

    def test_missing_header(self, client, db):
        response = _upload(client, b"postId,id,name,body\n1,1,a,b\n")
        assert response.status_code == 400
        assert response.get_json()["missing"] == ["email"]
        assert count(db) == 0

    def test_too_large(self, client, app):
        app.config["MAX_CONTENT_LENGTH"] = 64
        response = _upload(client, CSV * 10)
        assert response.status_code == 413
        assert response.get_json()["success"] is False

    def test_commit_failure_is_reported_once(self, client, db, monkeypatch):
        def _boom(self, records):
            raise CommitError("connection lost")
        monkeypatch.setattr(Upserter, "commit", _boom)

        response = _upload(client)
        assert response.status_code == 500
        assert response.get_json()["success"] is False
        assert count(db) == 0


class TestComments:

    def test_list(self, client):
        _upload(client)
        response = client.get("/api/v1/comments?page=1&limit=1&sortBy=id&order=desc")
        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["data"][0]["commentId"] == 3
        assert body["data"][0]["email"] == "ok@example.com"
        assert body["pagination"] == {
            "page": 1, "limit": 1, "total": 2, "totalPages": 2, "hasNext": True, "hasPrev": False,
        }

    def test_list_clamps_bad_params(self, client):
        response = client.get("/api/v1/comments?page=0&limit=9999&sortBy=dropTable&order=up")
        assert response.status_code == 200
        pagination = response.get_json()["pagination"]
        assert (pagination["page"], pagination["limit"]) == (1, 100)

    def test_search(self, client):
        _upload(client)
        body = client.get("/api/v1/comments?search=valid@").get_json()
        assert [c["commentId"] for c in body["data"]] == [1]

    def test_delete_all(self, client, db):
        _upload(client)
        response = client.delete("/api/v1/comments")
        assert response.get_json() == {"success": True, "message": "Deleted 2 comments", "deletedCount": 2}
        assert count(db) == 0

    def test_health(self, client):
        assert client.get("/api/v1/health").get_json() == {"status": "ok"}

    def test_unknown_route(self, client):
        response = client.get("/api/v1/nope")
        assert response.status_code == 404
        assert response.get_json()["success"] is False


def test_list_with_huge_page(client):
    _upload(client)
    response = client.get("/api/v1/comments?page=99999999999999999999")
    assert response.status_code == 200
    body = response.get_json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 2


def test_upload_with_out_of_range_id(client, db):
    response = _upload(client, b"postId,id,name,email,body\n1,1,A,a@x.io,B\n1,1e20,C,c@x.io,D\n")
    assert response.status_code == 201
    assert response.get_json()["stats"]["errors"] == [{"row": 2, "reason": "id must be a valid number"}]
    assert count(db) == 1
