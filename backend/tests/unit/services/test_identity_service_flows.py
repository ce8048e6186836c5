# tests/unit/services/test_identity_service_flows.py
from __future__ import annotations

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from vidshare.services._shared.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
    UploadFailedError,
)
from vidshare.services.identity.dto import (
    AccountUpdateIn,
    PasswordChangeIn,
    RegisterIn,
    UserPublicOut,
)
from vidshare.services.identity.service import IdentityService


@pytest.fixture()
def service(media_relay) -> IdentityService:
    return IdentityService(media_relay=media_relay)


def _register_in(staged, **overrides) -> RegisterIn:
    values = {
        "username": "NewUser",
        "email": "New@Example.com",
        "full_name": "New User",
        "password": "s3cret!",
        "avatar_path": staged("avatar.png"),
        "cover_image_path": None,
    }
    values.update(overrides)
    return RegisterIn(**values)


class TestRegister:
    def test_register_success(self, service, staged, media_relay):
        out = service.register(_register_in(staged, cover_image_path=staged("cover.png")))

        assert isinstance(out, UserPublicOut)
        assert out.username == "newuser"
        assert out.email == "new@example.com"
        assert out.avatar == "https://media.test/avatar.png"
        assert out.cover_image == "https://media.test/cover.png"
        assert media_relay.uploaded == ["avatar.png", "cover.png"]

    def test_cover_image_is_optional(self, service, staged):
        out = service.register(_register_in(staged))
        assert out.cover_image == ""

    @pytest.mark.parametrize("field", ["username", "email", "full_name", "password"])
    def test_blank_fields_rejected(self, service, staged, field):
        with pytest.raises(InvalidInputError, match="All fields are required"):
            service.register(_register_in(staged, **{field: "   "}))

    def test_username_conflict(self, service, staged):
        UserFactory(username="newuser")

        with pytest.raises(ConflictError) as excinfo:
            service.register(_register_in(staged))
        assert excinfo.value.field == "username"

    def test_email_conflict(self, service, staged):
        UserFactory(email="new@example.com")

        with pytest.raises(ConflictError) as excinfo:
            service.register(_register_in(staged))
        assert excinfo.value.field == "email"

    def test_conflict_checked_before_avatar(self, service):
        UserFactory(username="newuser")

        with pytest.raises(ConflictError):
            service.register(
                RegisterIn(
                    username="newuser",
                    email="other@example.com",
                    full_name="N",
                    password="x",
                )
            )

    def test_missing_avatar_creates_nothing(self, service, staged, session):
        from vidshare.repositories.user import UserRepository

        with pytest.raises(InvalidInputError, match="Avatar file is required"):
            service.register(_register_in(staged, avatar_path=None))
        assert UserRepository().get_by_username("newuser") is None

    def test_invalid_email_rejected_before_upload(self, service, staged, media_relay):
        with pytest.raises(InvalidInputError, match="Email format looks invalid"):
            service.register(_register_in(staged, email="notanemail"))
        assert media_relay.uploaded == []

    def test_failed_avatar_upload(self, service, staged, media_relay):
        media_relay.fail = True

        with pytest.raises(UploadFailedError):
            service.register(_register_in(staged))


class TestProfile:
    def test_get_current_user(self, service):
        user = UserFactory()
        assert service.get_current_user(user.id).id == user.id

    def test_get_current_user_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_current_user(999_999)

    def test_update_account(self, service):
        user = UserFactory()

        out = service.update_account(user.id, AccountUpdateIn(full_name=" Renamed ", email="RE@example.com"))

        assert out.full_name == "Renamed"
        assert out.email == "re@example.com"

    def test_update_account_requires_both(self, service):
        user = UserFactory()
        with pytest.raises(InvalidInputError, match="All fields are required"):
            service.update_account(user.id, AccountUpdateIn(full_name="x", email=None))

    def test_update_account_email_conflict(self, service):
        UserFactory(email="taken@example.com")
        user = UserFactory()

        with pytest.raises(ConflictError):
            service.update_account(user.id, AccountUpdateIn(full_name="x", email="taken@example.com"))

    def test_update_avatar(self, service, staged):
        user = UserFactory()
        out = service.update_avatar(user.id, staged("new-avatar.png"))
        assert out.avatar == "https://media.test/new-avatar.png"

    def test_update_cover_image_missing_file(self, service):
        user = UserFactory()
        with pytest.raises(InvalidInputError, match="Cover image file is missing"):
            service.update_cover_image(user.id, None)

    def test_update_cover_image_upload_failure(self, service, staged, media_relay):
        user = UserFactory()
        media_relay.fail = True
        with pytest.raises(UploadFailedError):
            service.update_cover_image(user.id, staged("cover.png"))


class TestChangePassword:
    def test_change_password(self, service, session):
        from vidshare.models.user import User

        user = UserFactory()

        service.change_password(
            user.id,
            PasswordChangeIn(
                old_password=DEFAULT_PASSWORD, new_password="n3w-pass", confirm_password="n3w-pass"
            ),
        )

        session.expire_all()
        assert session.get(User, user.id).verify_password("n3w-pass")

    def test_confirmation_mismatch(self, service, session):
        from vidshare.models.user import User

        user = UserFactory()
        original_hash = user.password_hash

        with pytest.raises(InvalidInputError, match="Password doesn't match"):
            service.change_password(
                user.id,
                PasswordChangeIn(old_password=DEFAULT_PASSWORD, new_password="a", confirm_password="b"),
            )

        session.expire_all()
        stored = session.get(User, user.id)
        assert stored.password_hash == original_hash
        assert stored.verify_password(DEFAULT_PASSWORD)

    def test_wrong_old_password(self, service):
        user = UserFactory()
        with pytest.raises(UnauthorizedError, match="Invalid old password"):
            service.change_password(
                user.id,
                PasswordChangeIn(old_password="wrong", new_password="a", confirm_password="a"),
            )
