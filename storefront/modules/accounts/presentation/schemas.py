# 📄 File: storefront/modules/accounts/presentation/schemas.py
# 🧭 Purpose (Layman Explanation):
# Checks the sign-up and sign-in forms before anything is looked up or saved,
# so visitors get clear messages about what to fix.
# 🧪 Purpose (Technical Summary):
# Pydantic schemas validating the parsed form bodies of the user routes, plus a
# helper flattening a pydantic ValidationError into flashable messages.
# 🔗 Dependencies:
# pydantic (EmailStr needs email-validator)
# 🔄 Connected Modules / Calls From:
# storefront.api.routes.user

from typing import List

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

MIN_PASSWORD_LENGTH = 4


class SigninForm(BaseModel):
    """Sign-in credentials."""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class SignupForm(SigninForm):
    """Registration data."""
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


FIELD_MESSAGES = {
    "email": "Please enter a valid email address",
    "password": f"Please enter a password of at least {MIN_PASSWORD_LENGTH} characters",
    "username": "Please enter a username",
}


def form_errors(exc: ValidationError) -> List[str]:
    """Turn validation errors into one message per invalid field."""
    messages: List[str] = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else ""
        message = FIELD_MESSAGES.get(field, error["msg"])
        if message not in messages:
            messages.append(message)
    return messages
