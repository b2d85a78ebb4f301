from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""

    email: str
    password: str


class SignUpRequest(BaseModel):
    email: str
    password: str
    redirect_to: str | None = None


class PasswordResetRequest(BaseModel):
    email: str
    redirect_to: str | None = None


class PasswordUpdateRequest(BaseModel):
    """Request body for POST /auth/password (recovery session required)."""

    password: str
    confirm_password: str = Field(..., alias="confirmPassword")

    model_config = {"populate_by_name": True}
