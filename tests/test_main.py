from sqlalchemy.exc import OperationalError

from dancey_portal.api.deps import get_db
from main import app


def test_read_main(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the Dancey Admin Portal API! Visit /docs for API documentation."}


def test_portal_error_body(client):
    response = client.get("/api/v1/classes/missing")
    assert response.status_code == 404
    assert response.json() == {"detail": "Class not found"}


class UnreachableSession:
    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    execute = _fail
    get = _fail


def test_store_unavailable_is_503(client):
    app.dependency_overrides[get_db] = lambda: UnreachableSession()

    response = client.get("/api/v1/classes")

    assert response.status_code == 503
    assert response.json() == {"detail": "Service temporarily unavailable"}
