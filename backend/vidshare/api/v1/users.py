"""User endpoints: registration, session tokens, profile and channel reads."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import (
    REFRESH_COOKIE,
    api_response,
    auth_service,
    channel_service,
    clear_auth_cookies,
    current_identity,
    identity_service,
    require_auth,
    set_auth_cookies,
    staged_files,
    timing,
)
from vidshare.schemas import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserSchema,
    VideoSchema,
)
from vidshare.services.auth.dto import LoginIn, RefreshIn
from vidshare.services.identity.dto import AccountUpdateIn, PasswordChangeIn, RegisterIn

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
change_password_schema = ChangePasswordSchema()
update_account_schema = UpdateAccountSchema()
user_schema = UserSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()
channel_schema = ChannelProfileSchema()
videos_schema = VideoSchema(many=True)


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


# ------------------------------ Public routes --------------------------------


@bp.post("/register")
@timing
def register():
    """Register a user from a multipart form with ``avatar`` and ``coverImage`` files."""

    data = register_schema.load(request.form)
    with staged_files("avatar", "coverImage") as files:
        user = identity_service().register(
            RegisterIn(
                username=data["username"],
                email=data["email"],
                full_name=data["full_name"],
                password=data["password"],
                avatar_path=files["avatar"],
                cover_image_path=files["coverImage"],
            )
        )
    return api_response(user_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate with username or email and set both auth cookies."""

    data = login_schema.load(_json_body() or request.form)
    result = auth_service().login(
        LoginIn(username=data["username"], email=data["email"], password=data["password"])
    )
    response = api_response(login_response_schema.dump(result), "User logged in successfully")
    return set_auth_cookies(response, result.tokens)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token taken from the cookie, or from the body."""

    incoming = request.cookies.get(REFRESH_COOKIE)
    if not incoming:
        incoming = refresh_schema.load(_json_body())["refresh_token"]
    tokens = auth_service().refresh(RefreshIn(refresh_token=incoming))
    response = api_response(token_pair_schema.dump(tokens), "Access token refreshed")
    return set_auth_cookies(response, tokens)


# ----------------------------- Protected routes ------------------------------


@bp.post("/logout")
@require_auth
@timing
def logout():
    identity = current_identity()
    auth_service(identity.id).logout(identity.id)
    return clear_auth_cookies(api_response({}, "User logged out"))


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    identity = current_identity()
    data = change_password_schema.load(_json_body())
    identity_service(identity.id).change_password(
        identity.id,
        PasswordChangeIn(
            old_password=data["old_password"],
            new_password=data["new_password"],
            confirm_password=data["confirm_password"],
        ),
    )
    return api_response({}, "Password changed successfully")


@bp.get("/current-user")
@require_auth
@timing
def current_user_route():
    return api_response(user_schema.dump(current_identity()), "Current user fetched successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    identity = current_identity()
    data = update_account_schema.load(_json_body())
    user = identity_service(identity.id).update_account(
        identity.id, AccountUpdateIn(full_name=data["full_name"], email=data["email"])
    )
    return api_response(user_schema.dump(user), "Account details updated successfully")


@bp.patch("/change-avatar")
@require_auth
@timing
def change_avatar():
    identity = current_identity()
    with staged_files("avatar") as files:
        user = identity_service(identity.id).update_avatar(identity.id, files["avatar"])
    return api_response(user_schema.dump(user), "Avatar updated successfully")


@bp.patch("/change-coverImage")
@require_auth
@timing
def change_cover_image():
    identity = current_identity()
    with staged_files("coverImage") as files:
        user = identity_service(identity.id).update_cover_image(identity.id, files["coverImage"])
    return api_response(user_schema.dump(user), "Cover image updated successfully")


@bp.get("/c/<string:username>")
@require_auth
@timing
def channel_profile(username: str):
    identity = current_identity()
    profile = channel_service(identity.id).get_channel_profile(username, identity.id)
    return api_response(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/watch-history")
@require_auth
@timing
def watch_history():
    identity = current_identity()
    videos = channel_service(identity.id).get_watch_history(identity.id)
    return api_response(videos_schema.dump(videos), "Watch history fetched successfully")
