"""
Integration tests for the admin license API.
"""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

import pytest
from django.urls import reverse
from django.utils import timezone

from licenses.infrastructure.models import License


def admin_url(name):
    return reverse(f"admin_api:{name}")


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAuthentication:
    """Admin routes require the bearer secret."""

    @pytest.mark.parametrize(
        "header",
        [None, "Bearer wrong-secret", "test-admin-secret", "Basic test-admin-secret", "Bearer "],
    )
    def test_rejected(self, api_client, db_license, header):
        """Test missing or mismatched secrets are rejected before any write."""
        db_license("acme")
        if header is not None:
            api_client.credentials(HTTP_AUTHORIZATION=header)

        response = api_client.post(
            admin_url("delete-license"), {"client_id": "acme"}, format="json"
        )

        assert response.status_code == 401
        assert response.json() == {
            "error": {"code": "UNAUTHORIZED", "message": "Unauthorized: Invalid admin key."}
        }
        assert License.objects.filter(client_id="acme").exists()

    def test_list_requires_secret(self, api_client):
        """Test reads are guarded as well."""
        assert api_client.get(admin_url("list-licenses")).status_code == 401

    def test_unconfigured_secret(self, admin_client, unconfigured_admin_secret):
        """Test a missing server secret is a server error."""
        response = admin_client.get(admin_url("list-licenses"))

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "ADMIN_SECRET_NOT_CONFIGURED"


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateLicenseAPI:
    """Integration tests for POST /api/v1/admin/licenses/create."""

    def test_create(self, admin_client):
        """Test creating an active license."""
        expires = timezone.now() + timedelta(days=365)

        response = admin_client.post(
            admin_url("create-license"),
            {"client_id": "acme", "expiration_date": expires.isoformat()},
            format="json",
        )

        assert response.status_code == 201
        assert response.json() == {
            "success": True,
            "message": "License for acme created successfully.",
        }
        row = License.objects.get(client_id="acme")
        assert row.status == "ACTIVA"
        assert row.expiration_date == expires
        assert row.last_seen is None

    def test_create_with_utc_designator(self, admin_client):
        """Test a JavaScript-style ISO timestamp with a trailing Z is accepted."""
        response = admin_client.post(
            admin_url("create-license"),
            {"client_id": "acme", "expiration_date": "2031-01-01T00:00:00.000Z"},
            format="json",
        )

        assert response.status_code == 201
        row = License.objects.get(client_id="acme")
        assert row.expiration_date == datetime(2031, 1, 1, tzinfo=dt_timezone.utc)

    def test_create_duplicate(self, admin_client, db_license):
        """Test creating an existing license conflicts."""
        db_license("acme", status="BLOQUEADA")

        response = admin_client.post(
            admin_url("create-license"),
            {"client_id": "acme", "expiration_date": "2099-01-01"},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "LICENSE_ALREADY_EXISTS"
        assert License.objects.get(client_id="acme").status == "BLOQUEADA"

    @pytest.mark.parametrize(
        "body",
        [
            {"client_id": "  ", "expiration_date": "2099-01-01"},
            {"client_id": "acme"},
            {"client_id": "acme", "expiration_date": "soon"},
            {"client_id": "acme", "expiration_date": "2000-01-01"},
            {"client_id": "acme", "expiration_date": "9999-12-31T23:00:00-05:00"},
        ],
    )
    def test_create_invalid(self, admin_client, body):
        """Test invalid input is rejected."""
        response = admin_client.post(admin_url("create-license"), body, format="json")

        assert response.status_code == 400
        assert not License.objects.exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestDeleteLicenseAPI:
    """Integration tests for POST /api/v1/admin/licenses/delete."""

    def test_delete(self, admin_client, db_license):
        """Test deleting a license."""
        db_license("acme")

        response = admin_client.post(
            admin_url("delete-license"), {"client_id": "acme"}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "License acme deleted successfully.",
        }
        assert not License.objects.exists()

    def test_delete_missing(self, admin_client):
        """Test deleting an unknown license."""
        response = admin_client.post(
            admin_url("delete-license"), {"client_id": "ghost"}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"


@pytest.mark.django_db
@pytest.mark.integration
class TestExtendLicenseAPI:
    """Integration tests for POST /api/v1/admin/licenses/extend."""

    def test_extend_unblocks(self, admin_client, db_license):
        """Test extension reactivates a blocked, lapsed license."""
        db_license("acme", status="BLOQUEADA", expires_in=timedelta(days=-10))
        before = timezone.now()

        response = admin_client.post(
            admin_url("extend-license"), {"client_id": "acme", "days": 30}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        new_expiration = datetime.fromisoformat(data["new_expiration_date"].replace("Z", "+00:00"))
        assert before + timedelta(days=30) <= new_expiration <= timezone.now() + timedelta(days=30)
        row = License.objects.get(client_id="acme")
        assert row.status == "ACTIVA"
        assert row.expiration_date == new_expiration

    @pytest.mark.parametrize("days", [0, -3, "many", None])
    def test_extend_invalid_days(self, admin_client, db_license, days):
        """Test non-positive or non-integer days are rejected."""
        db_license("acme", status="BLOQUEADA")

        response = admin_client.post(
            admin_url("extend-license"), {"client_id": "acme", "days": days}, format="json"
        )

        assert response.status_code == 400
        assert License.objects.get(client_id="acme").status == "BLOQUEADA"

    def test_extend_out_of_range(self, admin_client, db_license):
        """Test an extension past the last representable date is rejected."""
        db_license("acme", status="BLOQUEADA")

        response = admin_client.post(
            admin_url("extend-license"), {"client_id": "acme", "days": 10**12}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ARGUMENT"
        assert License.objects.get(client_id="acme").status == "BLOQUEADA"

    def test_extend_missing(self, admin_client):
        """Test extending an unknown license."""
        response = admin_client.post(
            admin_url("extend-license"), {"client_id": "ghost", "days": 5}, format="json"
        )

        assert response.status_code == 404
        assert not License.objects.exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestSetLicenseStatusAPI:
    """Integration tests for POST /api/v1/admin/licenses/status."""

    def test_toggle(self, admin_client, db_license):
        """Test toggling an active license blocks it."""
        db_license("acme")

        response = admin_client.post(
            admin_url("set-license-status"), {"client_id": "acme"}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "newStatus": "BLOQUEADA"}

    def test_explicit_status(self, admin_client, db_license):
        """Test setting a pending license active."""
        db_license("acme", status="PENDIENTE")

        response = admin_client.post(
            admin_url("set-license-status"),
            {"client_id": "acme", "new_status": "ACTIVA"},
            format="json",
        )

        assert response.json() == {"success": True, "newStatus": "ACTIVA"}
        assert License.objects.get(client_id="acme").status == "ACTIVA"

    @pytest.mark.parametrize("new_status", ["PENDIENTE", "EXPIRADA", "whatever"])
    def test_invalid_status(self, admin_client, db_license, new_status):
        """Test derived or unknown statuses cannot be assigned."""
        db_license("acme")

        response = admin_client.post(
            admin_url("set-license-status"),
            {"client_id": "acme", "new_status": new_status},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_LICENSE_STATUS"
        assert License.objects.get(client_id="acme").status == "ACTIVA"

    def test_missing(self, admin_client):
        """Test changing an unknown license."""
        response = admin_client.post(
            admin_url("set-license-status"), {"client_id": "ghost"}, format="json"
        )
        assert response.status_code == 404


@pytest.mark.django_db
@pytest.mark.integration
class TestListLicensesAPI:
    """Integration tests for GET /api/v1/admin/licenses."""

    def test_list(self, admin_client, db_license):
        """Test listing reports stored statuses ordered by client id."""
        db_license("b-client", expires_in=timedelta(days=-1))
        db_license("a-client", status="BLOQUEADA")

        response = admin_client.get(admin_url("list-licenses"))

        assert response.status_code == 200
        data = response.json()
        assert [(item["id"], item["status"]) for item in data] == [
            ("a-client", "BLOQUEADA"),
            ("b-client", "ACTIVA"),
        ]
        assert set(data[0]) == {"id", "status", "expiration_date"}

    def test_list_corrupt_rows(self, admin_client, db_license):
        """Test unreadable expiration dates are reported as the epoch."""
        db_license("acme", expires_in=None)

        response = admin_client.get(admin_url("list-licenses"))

        assert response.json() == [
            {"id": "acme", "status": "ACTIVA", "expiration_date": "1970-01-01T00:00:00Z"}
        ]


@pytest.mark.django_db
@pytest.mark.integration
def test_admin_scenario(api_client, admin_client):
    """Create, block, validate, extend, validate, delete, validate."""
    validate_url = reverse("licenses_api:validate-license")

    def validate():
        return api_client.post(validate_url, {"client_id": "c1"}, format="json").json()

    expires = (timezone.now() + timedelta(days=10)).isoformat()
    admin_client.post(
        admin_url("create-license"),
        {"client_id": "c1", "expiration_date": expires},
        format="json",
    )
    assert admin_client.post(
        admin_url("set-license-status"),
        {"client_id": "c1", "new_status": "BLOQUEADA"},
        format="json",
    ).json() == {"success": True, "newStatus": "BLOQUEADA"}

    assert validate() == {"valid": False, "reason": "blocked"}

    admin_client.post(admin_url("extend-license"), {"client_id": "c1", "days": 5}, format="json")
    assert validate() == {"valid": True}

    admin_client.post(admin_url("delete-license"), {"client_id": "c1"}, format="json")
    assert validate() == {"valid": False, "reason": "pending_approval"}
    assert License.objects.get(client_id="c1").status == "PENDIENTE"
