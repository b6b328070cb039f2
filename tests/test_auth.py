"""Unit tests for AuthService and the security primitives"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from todoapp.auth.models import TokenClaims
from todoapp.auth.security import BcryptHasher, SerializerTokenSigner
from todoapp.auth.service import GENERIC_LOGIN_ERROR, AuthService
from todoapp.stores.memory import MemoryCollection
from todoapp.utils.exceptions import (
    AuthError,
    ConflictError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
    ValidationError,
)

from conftest import SECRET, FakeClock


@pytest.fixture
def users():
    return MemoryCollection()


@pytest.fixture
def service(users, clock):
    return AuthService(
        users=users,
        hasher=BcryptHasher(rounds=4),
        signer=SerializerTokenSigner(SECRET, clock=clock),
    )


class TestRegister:
    def test_register_returns_token_and_public_user(self, service, users):
        result = service.register("a@b.com", "pw", "A")

        assert result.token
        assert result.user.email == "a@b.com"
        assert result.user.name == "A"
        assert "password_hash" not in result.user.model_dump()
        stored = users.get(result.user.id)
        assert stored.password_hash != "pw"
        assert stored.password_hash.startswith("$2")

    @pytest.mark.parametrize("email,password,name", [
        (None, "pw", "A"),
        ("a@b.com", None, "A"),
        ("a@b.com", "pw", None),
        ("  ", "pw", "A"),
        ("a@b.com", "pw", ""),
    ])
    def test_register_missing_field(self, service, email, password, name):
        with pytest.raises(ValidationError):
            service.register(email, password, name)

    def test_register_duplicate_email(self, service):
        service.register("a@b.com", "pw", "A")
        with pytest.raises(ConflictError):
            service.register("a@b.com", "other", "B")

    def test_duplicate_email_is_case_insensitive(self, service):
        service.register("a@b.com", "pw", "A")
        with pytest.raises(ConflictError):
            service.register("A@B.com", "pw", "A")

    def test_concurrent_registrations_store_one_user(self, service, users):
        def attempt(_):
            try:
                service.register("a@b.com", "pw", "A")
                return True
            except ConflictError:
                return False

        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(attempt, range(4)))

        assert outcomes.count(True) == 1
        assert outcomes.count(False) == 3
        assert len(users.all()) == 1

    @pytest.mark.parametrize("password", ["p" * 80, "密" * 30])
    def test_passwords_over_72_bytes(self, service, password):
        service.register("a@b.com", password, "A")
        assert service.login("a@b.com", password).user.email == "a@b.com"
        with pytest.raises(AuthError):
            service.login("a@b.com", password[:-1])

    def test_token_carries_user_id_and_email(self, service):
        result = service.register("a@b.com", "pw", "A")
        claims = service.authenticate(result.token)
        assert claims == TokenClaims(user_id=result.user.id, email="a@b.com")


class TestLogin:
    def test_login_success(self, service):
        registered = service.register("a@b.com", "pw", "A")
        result = service.login("a@b.com", "pw")
        assert result.user == registered.user
        assert service.authenticate(result.token).user_id == registered.user.id

    def test_login_missing_fields(self, service):
        with pytest.raises(ValidationError):
            service.login("a@b.com", "")

    def test_unknown_email_and_wrong_password_are_distinct(self, service):
        service.register("a@b.com", "pw", "A")
        with pytest.raises(AuthError) as unknown:
            service.login("nobody@b.com", "pw")
        with pytest.raises(AuthError) as wrong:
            service.login("a@b.com", "nope")
        assert unknown.value.message != wrong.value.message

    def test_generic_login_errors(self, users, clock):
        service = AuthService(
            users=users,
            hasher=BcryptHasher(rounds=4),
            signer=SerializerTokenSigner(SECRET, clock=clock),
            generic_login_errors=True,
        )
        service.register("a@b.com", "pw", "A")
        with pytest.raises(AuthError, match=GENERIC_LOGIN_ERROR):
            service.login("nobody@b.com", "pw")
        with pytest.raises(AuthError, match=GENERIC_LOGIN_ERROR):
            service.login("a@b.com", "nope")


class TestAuthenticate:
    def test_missing_token(self, service):
        with pytest.raises(MissingTokenError):
            service.authenticate(None)
        with pytest.raises(MissingTokenError):
            service.authenticate("")

    def test_garbage_token(self, service):
        with pytest.raises(InvalidTokenError):
            service.authenticate("not-a-token")

    def test_token_signed_with_other_secret(self, service):
        other = SerializerTokenSigner("another-secret")
        token = other.issue(TokenClaims(user_id="u1", email="a@b.com"))
        with pytest.raises(InvalidTokenError):
            service.authenticate(token)

    def test_token_expires_after_24_hours(self, service, clock):
        token = service.register("a@b.com", "pw", "A").token

        clock.advance(24 * 3600)
        assert service.authenticate(token).email == "a@b.com"

        clock.advance(1)
        with pytest.raises(InvalidTokenError, match="expired"):
            service.authenticate(token)


def test_get_current_user(service, users):
    result = service.register("a@b.com", "pw", "A")
    assert service.get_current_user(result.user.id) == result.user

    users.delete(result.user.id)
    with pytest.raises(NotFoundError):
        service.get_current_user(result.user.id)


def test_bcrypt_hasher_rejects_malformed_hash():
    hasher = BcryptHasher(rounds=4)
    assert hasher.verify("pw", hasher.hash("pw"))
    assert not hasher.verify("pw", "not-a-bcrypt-hash")


def test_signer_requires_secret():
    with pytest.raises(ValueError):
        SerializerTokenSigner("")


def test_signer_rejects_payload_without_user():
    clock = FakeClock()
    signer = SerializerTokenSigner(SECRET, clock=clock)
    token = signer._serializer.dumps({"email": "a@b.com"})
    with pytest.raises(InvalidTokenError):
        signer.verify(token)
