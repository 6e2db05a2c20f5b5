"""
Unit tests for the login, logout and password change flows.

Uses the in-memory credential store and counter store.
"""

import pytest

from planner_api.context import Identity, RequestContext, TenantRecord
from planner_api.errors import InvalidCredentials, TenantRequired, Unauthenticated
from planner_api.models import hash_password, verify_password
from planner_api.services import AuthService, CounterStore, TokenCodec
from tests.mocks import FakeCredentialStore, make_user

PASSWORD = "CorrectHorse42!"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def store() -> FakeCredentialStore:
    user = make_user(token_version=3)
    return FakeCredentialStore(users=[user], passwords={user.id: PASSWORD_HASH})


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec("auth-service-test-secret-with-32-bytes!")


@pytest.fixture
def service(store, codec) -> AuthService:
    return AuthService(store, codec, CounterStore())


def tenant_ctx(validated: bool = True) -> RequestContext:
    return RequestContext(tenant_id="tenant-acme", tenant_validated=validated)


def signed_in(store: FakeCredentialStore, codec: TokenCodec) -> RequestContext:
    user = store.users["user-1"]
    token = codec.issue(user.id, user.email, user.organization_id, "tenant-acme", user.token_version)
    return RequestContext(
        tenant_id="tenant-acme",
        identity=Identity(user=user),
        token=token,
        token_payload=codec.verify(token),
    )


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_issues_current_version(self, service, store, codec):
        result = await service.login(tenant_ctx(), "A@acme.com", PASSWORD)

        payload = codec.verify(result.access_token)
        assert payload.user_id == "user-1"
        assert payload.tenant_id == "tenant-acme"
        assert payload.token_version == 3
        assert result.expires_in == 3600
        assert store.login_attempts["user-1"] == 0
        assert "user-1" in store.last_login

    @pytest.mark.asyncio
    async def test_wrong_password_counts_failure(self, service, store):
        for _ in range(5):
            with pytest.raises(InvalidCredentials):
                await service.login(tenant_ctx(), "a@acme.com", "wrong")

        assert store.login_attempts["user-1"] == 5

    @pytest.mark.asyncio
    async def test_unknown_email_same_error(self, service, store):
        with pytest.raises(InvalidCredentials) as unknown:
            await service.login(tenant_ctx(), "nobody@acme.com", PASSWORD)
        with pytest.raises(InvalidCredentials) as wrong:
            await service.login(tenant_ctx(), "a@acme.com", "wrong")

        assert unknown.value.message == wrong.value.message
        assert store.calls_to("increment_login_attempts") == [
            ("increment_login_attempts", "user-1")
        ]

    @pytest.mark.asyncio
    async def test_other_tenant_cannot_login(self, service):
        ctx = RequestContext(tenant_id="tenant-beta", tenant_validated=True)
        with pytest.raises(InvalidCredentials):
            await service.login(ctx, "a@acme.com", PASSWORD)

    @pytest.mark.asyncio
    async def test_requires_validated_tenant(self, service, store):
        with pytest.raises(TenantRequired):
            await service.login(tenant_ctx(validated=False), "a@acme.com", PASSWORD)
        assert store.calls == []


class TestLogout:
    @pytest.mark.asyncio
    async def test_blacklists_presented_token(self, service, store, codec):
        ctx = signed_in(store, codec)

        await service.logout(ctx)

        assert await service.counters.is_token_revoked(ctx.token) is True

    @pytest.mark.asyncio
    async def test_requires_token(self, service):
        with pytest.raises(Unauthenticated):
            await service.logout(RequestContext())

    @pytest.mark.asyncio
    async def test_logout_all_bumps_version(self, service, store, codec):
        version = await service.logout_all(signed_in(store, codec))

        assert version == 4
        assert store.users["user-1"].token_version == 4


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_success(self, service, store, codec):
        version = await service.change_password(signed_in(store, codec), PASSWORD, "N3w-password!")

        assert version == 4
        assert verify_password("N3w-password!", store.passwords["user-1"])

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, service, store, codec):
        with pytest.raises(InvalidCredentials) as exc_info:
            await service.change_password(signed_in(store, codec), "wrong", "N3w-password!")

        assert exc_info.value.message == "Current password is incorrect."
        assert store.passwords["user-1"] == PASSWORD_HASH


class TestSubdomainAvailability:
    @pytest.mark.asyncio
    async def test_available(self, service):
        assert await service.is_subdomain_available("fresh") is True

    @pytest.mark.asyncio
    async def test_taken(self, codec):
        store = FakeCredentialStore(
            tenants=[TenantRecord(id="t1", subdomain="acme", name="Acme", status="ACTIVE")]
        )
        service = AuthService(store, codec, CounterStore())

        assert await service.is_subdomain_available("acme") is False
