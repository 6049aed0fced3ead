"""User, authentication and channel endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from vidshare.api.deps import (
    build_token_service,
    current_context,
    media_uploader,
    request_payload,
    require_auth,
    respond,
    set_auth_cookies,
    timing,
    unset_auth_cookies,
)
from vidshare.api.uploads import staged_files
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
from vidshare.services.auth.dto import ChangePasswordIn, LoginIn, RefreshIn, RegisterIn
from vidshare.services.auth.service import AuthService
from vidshare.services.users.dto import UpdateAccountIn
from vidshare.services.users.service import UserService

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
video_list_schema = VideoSchema(many=True)


def _auth_service(*, with_media: bool = False) -> AuthService:
    return AuthService(
        tokens=build_token_service(),
        media=media_uploader() if with_media else None,
        ctx=current_context().service_context(),
    )


def _user_service(*, with_media: bool = False) -> UserService:
    return UserService(
        media=media_uploader() if with_media else None,
        ctx=current_context().service_context(),
    )


# ------------------------------ Auth ------------------------------------------


@bp.post("/register")
@timing
def register():
    """Create an account from multipart form data (avatar required)."""

    data = register_schema.load(request.form.to_dict())
    with staged_files("avatar", "coverImage") as files:
        user = _auth_service(with_media=True).register(
            RegisterIn(
                full_name=data["full_name"],
                email=data["email"],
                username=data["username"],
                password=data["password"],
                avatar_path=files["avatar"],
                cover_image_path=files["coverImage"],
            )
        )
    return respond(user_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate by email or username; tokens go to the body and cookies."""

    data = login_schema.load(request_payload())
    out = _auth_service().login(
        LoginIn(password=data["password"], email=data["email"], username=data["username"])
    )
    response = respond(login_response_schema.dump(out), "User logged in successfully")
    return set_auth_cookies(response, out.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout():
    _auth_service().logout()
    return unset_auth_cookies(respond({}, "User logged out"))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token; the presented one stops working."""

    cookie_name = current_app.config["JWT_REFRESH_COOKIE_NAME"]
    token = request.cookies.get(cookie_name)
    if not token:
        token = refresh_schema.load(request_payload())["refresh_token"]
    pair = _auth_service().refresh(RefreshIn(refresh_token=token))
    response = respond(token_pair_schema.dump(pair), "Access token refreshed")
    return set_auth_cookies(response, pair)


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = change_password_schema.load(request_payload())
    _auth_service().change_password(
        ChangePasswordIn(old_password=data["old_password"], new_password=data["new_password"])
    )
    return respond({}, "Password changed successfully")


# ------------------------------ Profile ---------------------------------------


@bp.get("/current-user")
@require_auth
@timing
def current_user():
    user = _user_service().current_user()
    return respond(user_schema.dump(user), "Current user fetched successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    data = update_account_schema.load(request_payload())
    user = _user_service().update_account(
        UpdateAccountIn(full_name=data["full_name"], email=data["email"])
    )
    return respond(user_schema.dump(user), "Account details updated successfully")


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar():
    with staged_files("avatar") as files:
        user = _user_service(with_media=True).update_avatar(files["avatar"])
    return respond(user_schema.dump(user), "Avatar image updated successfully")


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image():
    with staged_files("coverImage") as files:
        user = _user_service(with_media=True).update_cover_image(files["coverImage"])
    return respond(user_schema.dump(user), "Cover image updated successfully")


# ------------------------------ Channel ---------------------------------------


@bp.get("/c/<username>")
@require_auth
@timing
def channel_profile(username: str):
    profile = _user_service().channel_profile(username)
    return respond(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/history")
@require_auth
@timing
def watch_history():
    videos = _user_service().watch_history()
    return respond(video_list_schema.dump(videos), "Watch history fetched successfully")
