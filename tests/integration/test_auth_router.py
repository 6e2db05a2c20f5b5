"""
Integration tests for /api/auth endpoints.

Covers login (tenant resolution, failure counting, rate limiting),
logout and logout-all revocation, password change, /me, subdomain
availability and the declared-but-unimplemented endpoints.
"""

import jwt
import pytest

from planner_api.config import get_api_settings
from tests.fixtures.factories import create_organization, create_tenant, create_user

LOGIN = "/api/auth/login"


def login(client, email, password, tenant="acme"):
    headers = {"X-Tenant-Id": tenant} if tenant else {}
    return client.post(LOGIN, json={"email": email, "password": password}, headers=headers)


class TestLogin:
    """Tests for POST /api/auth/login"""

    def test_login_success(self, client, acme_tenant, acme_org, test_db, user_password):
        """Valid credentials return a token carrying the stored token version"""
        user = create_user(
            db=test_db,
            organization=acme_org,
            email="a@acme.com",
            token_version=3,
            first_name="Ada",
        )

        response = login(client, "a@acme.com", user_password)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["token_type"] == "bearer"
        assert body["data"]["expires_in"] == 3600
        assert body["data"]["user"]["first_name"] == "Ada"

        settings = get_api_settings()
        claims = jwt.decode(
            body["data"]["access_token"], settings.secret_key, algorithms=[settings.token_algorithm]
        )
        assert claims["sub"] == user.id
        assert claims["tenant_id"] == acme_tenant.id
        assert claims["organization_id"] == acme_org.id
        assert claims["token_version"] == 3

    def test_login_by_subdomain(self, client, acme_user, user_password):
        response = client.post(
            LOGIN,
            json={"email": "a@acme.com", "password": user_password},
            headers={"Host": "acme.planner.app"},
        )
        assert response.status_code == 200

    def test_wrong_password_counts_attempts(self, client, acme_user, test_db):
        """Five failures are counted; the sixth still gets the generic message"""
        for _ in range(5):
            response = login(client, "a@acme.com", "wrong-password")
            assert response.status_code == 401

        test_db.refresh(acme_user)
        assert acme_user.login_attempts == 5

        response = login(client, "a@acme.com", "wrong-password")
        assert response.status_code == 401
        body = response.json()
        assert body == {"status": "error", "message": "Incorrect email or password."}

    def test_unknown_email_same_response(self, client, acme_user):
        unknown = login(client, "nobody@acme.com", "whatever")
        wrong = login(client, "a@acme.com", "whatever")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_success_resets_attempts(self, client, acme_user, test_db, user_password):
        login(client, "a@acme.com", "wrong-password")
        login(client, "a@acme.com", user_password)

        test_db.refresh(acme_user)
        assert acme_user.login_attempts == 0
        assert acme_user.last_login_at is not None

    def test_user_of_other_tenant_cannot_login(self, client, acme_user, test_db, user_password):
        beta = create_tenant(db=test_db, subdomain="beta")
        create_organization(db=test_db, tenant=beta)

        response = login(client, "a@acme.com", user_password, tenant="beta")
        assert response.status_code == 401

    def test_missing_tenant(self, client, acme_user, user_password):
        response = login(client, "a@acme.com", user_password, tenant=None)

        assert response.status_code == 400
        assert "Tenant required" in response.json()["message"]

    def test_unknown_tenant(self, client, acme_user, user_password):
        response = login(client, "a@acme.com", user_password, tenant="ghost")

        assert response.status_code == 404
        assert response.json()["message"] == "Tenant not found."

    def test_suspended_tenant(self, client, test_db, user_password):
        tenant = create_tenant(db=test_db, subdomain="sleepy", status="SUSPENDED")
        org = create_organization(db=test_db, tenant=tenant)
        create_user(db=test_db, organization=org, email="z@sleepy.com")

        response = login(client, "z@sleepy.com", user_password, tenant="sleepy")

        assert response.status_code == 403
        assert "SUSPENDED" in response.json()["message"]

    def test_validation_error_format(self, client, acme_user):
        response = login(client, "not-an-email", "")

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Validation failed"
        fields = {e["field"] for e in body["errors"]}
        assert fields == {"email", "password"}
        email_error = next(e for e in body["errors"] if e["field"] == "email")
        assert email_error["value"] == "not-an-email"

    def test_rate_limited(self, client, acme_user):
        """Eleventh attempt within the window is rejected with 429"""
        for _ in range(10):
            response = login(client, "a@acme.com", "wrong-password")
            assert response.status_code == 401

        response = login(client, "a@acme.com", "wrong-password")

        assert response.status_code == 429
        assert response.json()["message"] == "Too many login attempts. Please try again later."
        assert int(response.headers["Retry-After"]) > 0
        assert response.headers["RateLimit-Limit"] == "10"
        assert response.headers["RateLimit-Remaining"] == "0"

    def test_rate_limit_headers(self, client, acme_user, user_password):
        response = login(client, "a@acme.com", user_password)

        assert response.headers["RateLimit-Limit"] == "10"
        assert response.headers["RateLimit-Remaining"] == "9"
        assert int(response.headers["RateLimit-Reset"]) > 0


class TestLogout:
    """Tests for logout and logout-all"""

    def test_logout_revokes_token(self, client, auth_headers):
        assert client.get("/api/auth/me", headers=auth_headers).status_code == 200

        response = client.post("/api/auth/logout", headers=auth_headers)
        assert response.status_code == 200

        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Token has been revoked. Please log in again."

    def test_logout_leaves_other_tokens(self, client, acme_user, issue_token, auth_headers):
        other = {"Authorization": f"Bearer {issue_token(acme_user, expires_in=600)}", "X-Tenant-Id": "acme"}

        client.post("/api/auth/logout", headers=auth_headers)

        assert client.get("/api/auth/me", headers=other).status_code == 200

    def test_logout_all_revokes_every_token(self, client, acme_user, issue_token, auth_headers, test_db):
        other = {"Authorization": f"Bearer {issue_token(acme_user, expires_in=600)}", "X-Tenant-Id": "acme"}

        response = client.post("/api/auth/logout-all", headers=auth_headers)
        assert response.status_code == 200

        test_db.refresh(acme_user)
        assert acme_user.token_version == 1
        assert client.get("/api/auth/me", headers=other).status_code == 401
        assert client.get("/api/auth/me", headers=auth_headers).status_code == 401

    def test_logout_requires_token(self, client, acme_user):
        response = client.post("/api/auth/logout")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestMe:
    """Tests for GET /api/auth/me"""

    def test_current_user(self, client, auth_headers, acme_tenant):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == "a@acme.com"
        assert data["first_name"] == "Ada"
        assert data["tenant"]["subdomain"] == "acme"
        assert data["roles"][0]["name"] == "Stage Manager"
        assert "create:event" in data["permissions"]
        assert data["permissions"] == sorted(data["permissions"])

    def test_tenant_from_token_when_no_header(self, client, acme_user, issue_token, acme_tenant):
        headers = {"Authorization": f"Bearer {issue_token(acme_user)}"}

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["tenant"]["id"] == acme_tenant.id

    def test_expired_token(self, client, acme_user, issue_token):
        headers = {"Authorization": f"Bearer {issue_token(acme_user, expires_in=-5)}", "X-Tenant-Id": "acme"}

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Token expired."

    def test_forged_token(self, client, acme_user):
        forged = jwt.encode(
            {
                "sub": acme_user.id,
                "email": acme_user.email,
                "organization_id": acme_user.organization_id,
                "tenant_id": "x",
                "token_version": 0,
                "exp": 9999999999,
            },
            "not-the-server-secret-but-long-enough!!",
            algorithm="HS256",
        )
        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {forged}", "X-Tenant-Id": "acme"}
        )
        assert response.status_code == 401

    def test_suspended_user(self, client, acme_user, auth_headers, test_db):
        acme_user.status = "SUSPENDED"
        test_db.commit()

        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "User account is SUSPENDED. Access denied."

    def test_token_used_on_another_tenant(self, client, acme_user, issue_token, test_db):
        create_tenant(db=test_db, subdomain="beta")
        headers = {"Authorization": f"Bearer {issue_token(acme_user)}", "X-Tenant-Id": "beta"}

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 403


class TestChangePassword:
    """Tests for POST /api/auth/change-password"""

    def test_change_password(self, client, auth_headers, user_password):
        response = client.post(
            "/api/auth/change-password",
            json={"current_password": user_password, "new_password": "Brand-New-Pass1"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        # Old token revoked, new password works, old one doesn't
        assert client.get("/api/auth/me", headers=auth_headers).status_code == 401
        assert login(client, "a@acme.com", "Brand-New-Pass1").status_code == 200
        assert login(client, "a@acme.com", user_password).status_code == 401

    def test_wrong_current_password(self, client, auth_headers):
        response = client.post(
            "/api/auth/change-password",
            json={"current_password": "nope", "new_password": "Brand-New-Pass1"},
            headers=auth_headers,
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect."

    def test_new_password_too_short(self, client, auth_headers, user_password):
        response = client.post(
            "/api/auth/change-password",
            json={"current_password": user_password, "new_password": "short"},
            headers=auth_headers,
        )
        assert response.status_code == 400


class TestValidateSubdomain:
    def test_taken(self, client, acme_tenant):
        response = client.get("/api/auth/validate-subdomain/acme")

        assert response.status_code == 200
        assert response.json()["data"] == {"subdomain": "acme", "available": False}

    def test_available(self, client, acme_tenant):
        response = client.get("/api/auth/validate-subdomain/fresh-co")
        assert response.json()["data"]["available"] is True

    def test_invalid_format(self, client, test_db):
        response = client.get("/api/auth/validate-subdomain/Not_Valid")
        assert response.status_code == 400


class TestNotImplemented:
    @pytest.mark.parametrize(
        "path",
        [
            "/api/auth/register",
            "/api/auth/verify-email",
            "/api/auth/resend-verification",
            "/api/auth/forgot-password",
            "/api/auth/reset-password",
            "/api/auth/refresh-token",
            "/api/auth/register-tenant",
        ],
    )
    def test_public_stubs(self, client, test_db, path):
        response = client.post(path)

        assert response.status_code == 501
        assert response.json()["status"] == "error"

    def test_device_registration_requires_auth(self, client, test_db):
        assert client.post("/api/auth/devices").status_code == 401

    def test_device_registration_stub(self, client, auth_headers):
        assert client.post("/api/auth/devices", headers=auth_headers).status_code == 501

    def test_password_reset_rate_limited(self, client, test_db):
        for _ in range(3):
            assert client.post("/api/auth/forgot-password").status_code == 501
        assert client.post("/api/auth/forgot-password").status_code == 429


class TestSystemEndpoints:
    def test_health(self, client, test_db):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database_connected"] is True
        assert data["counter_store_backend"] == "memory"

    def test_unknown_route(self, client, test_db):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Route GET /api/nope not found"}

    def test_request_id_header(self, client, test_db):
        response = client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8
