# 📄 File: storefront/api/routes/user.py
# 🧭 Purpose (Layman Explanation):
# Sign up, sign in, view your profile and sign out.
# 🧪 Purpose (Technical Summary):
# User router mounted under /user. Form posts are read from the parsed body on
# request state and validated with pydantic; failures are flashed and answered
# with a redirect back to the form (post/redirect/get).
# 🔗 Dependencies:
# pydantic, passlib (via storefront.shared.core.security)
# 🔄 Connected Modules / Calls From:
# storefront.api.routes (ROUTE_MOUNTS)

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError as FormValidationError
from starlette.responses import Response

from storefront.api.middleware.authentication import login_user, logout_user
from storefront.api.templating import render
from storefront.modules.accounts.domain.models import User
from storefront.modules.accounts.presentation.schemas import SigninForm, SignupForm, form_errors
from storefront.shared.core.dependencies import NEXT_URL_KEY, require_login
from storefront.shared.core.exceptions import DuplicateResourceError
from storefront.shared.core.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()

PROFILE_URL = "/user/profile"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _after_login_url(request: Request) -> str:
    next_url = request.session.pop(NEXT_URL_KEY, None)
    if isinstance(next_url, str) and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return PROFILE_URL


@router.get("/signup")
async def signup_form(request: Request) -> Response:
    return render(request, "user/signup.html", {"pageName": "Sign Up"})


@router.post("/signup")
async def signup(request: Request) -> Response:
    """Register a new account and sign it in."""
    flash = request.state.flash
    try:
        form = SignupForm.model_validate(request.state.body)
    except FormValidationError as e:
        for message in form_errors(e):
            flash.add("error", message)
        return _redirect("/user/signup")

    if await request.app.state.user_repository.get_by_email(form.email) is not None:
        flash.add("error", "Email already in use")
        return _redirect("/user/signup")

    try:
        user = await request.app.state.user_repository.create(
            User(
                username=form.username,
                email=form.email,
                password_hash=get_password_hash(form.password),
            )
        )
    except DuplicateResourceError:
        flash.add("error", "Email already in use")
        return _redirect("/user/signup")

    logger.info(f"New account registered: {user.id}")
    login_user(request, user)
    return _redirect(_after_login_url(request))


@router.get("/signin")
async def signin_form(request: Request) -> Response:
    return render(request, "user/signin.html", {"pageName": "Sign In"})


@router.post("/signin")
async def signin(request: Request) -> Response:
    """Check credentials and sign the user in."""
    flash = request.state.flash
    try:
        form = SigninForm.model_validate(request.state.body)
    except FormValidationError as e:
        for message in form_errors(e):
            flash.add("error", message)
        return _redirect("/user/signin")

    user = await request.app.state.user_repository.get_by_email(form.email)
    if user is None or not verify_password(form.password, user.password_hash):
        logger.info("Failed sign-in attempt")
        flash.add("error", "Wrong email or password")
        return _redirect("/user/signin")

    login_user(request, user)
    return _redirect(_after_login_url(request))


@router.get("/profile")
async def profile(request: Request, current_user: User = Depends(require_login)) -> Response:
    return render(request, "user/profile.html", {"pageName": "User Profile", "user": current_user})


@router.get("/logout")
async def logout(request: Request, current_user: User = Depends(require_login)) -> Response:
    logout_user(request)
    return _redirect("/")
