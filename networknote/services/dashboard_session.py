"""
Dashboard session state.

Holds the single AuthMode for a browser session plus the last selected
regular-user tab, and re-resolves role/view on every auth-state change.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from networknote.auth.overrides import match_override
from networknote.errors import AuthFailure, ValidationError
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.session_domain import (
    DEFAULT_TAB,
    REGULAR_TABS,
    AdminOverride,
    AuthEvent,
    AuthMode,
    DashboardView,
    Identity,
    ManagerOverride,
    RealSession,
    Role,
    RolePolicy,
    RoleResolution,
    Unauthenticated,
)
from networknote.services.notifications import NotificationChannel
from networknote.services.role_resolver import resolve_role, resolve_session
from networknote.services.supabase_auth_service import SupabaseAuthService

logger = get_logger(__name__)


class EmailAddress(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def _max_length(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("Email must be at most 255 characters")
        return value


class Credentials(EmailAddress):
    password: str = Field(..., min_length=6, max_length=100)


def validate_credentials(email: str, password: str) -> Credentials:
    try:
        return Credentials(email=email, password=password)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else "credentials"
        message = (
            "Invalid email address"
            if field == "email"
            else "Password must be between 6 and 100 characters"
        )
        raise ValidationError(message, title="Validation Error", missing_fields=[field]) from e


class DashboardSession:
    """Session/role state machine for one browser session."""

    def __init__(
        self,
        auth_service: SupabaseAuthService,
        policy: RolePolicy,
        notifier: NotificationChannel | None = None,
        mode: AuthMode | None = None,
        access_token: str | None = None,
    ):
        self.auth_service = auth_service
        self.policy = policy
        self.notifier = notifier or NotificationChannel()
        self.mode: AuthMode = mode or Unauthenticated()
        self.access_token = access_token
        self.active_tab: DashboardView = DEFAULT_TAB
        self.initialized = False

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @property
    def override_active(self) -> bool:
        return isinstance(self.mode, (AdminOverride, ManagerOverride))

    @property
    def role(self) -> Role | None:
        return resolve_role(self.mode, self.policy)

    @property
    def resolution(self) -> RoleResolution:
        return resolve_session(self.mode, self.policy, self.active_tab)

    def _apply_mode(self, mode: AuthMode) -> RoleResolution:
        previous_role = self.role
        self.mode = mode
        role = self.role

        if role == Role.ADMIN:
            self.active_tab = DashboardView.ADMIN_CONSOLE
        elif self.active_tab == DashboardView.ADMIN_CONSOLE:
            # No dangling privileged tab after a downgrade
            self.active_tab = DEFAULT_TAB

        if previous_role != role:
            logger.info(
                "Session role changed",
                previous_role=previous_role.value if previous_role else None,
                role=role.value if role else None,
                mode=type(mode).__name__,
            )
        return self.resolution

    async def initialize(self) -> RoleResolution:
        """Resolve the session once at load. Overrides skip the identity lookup."""
        self.initialized = True
        if self.override_active:
            return self._apply_mode(self.mode)

        try:
            identity = await self.auth_service.get_session(self.access_token)
        except Exception as e:
            logger.warning("Session lookup failed, redirecting to login", error=str(e))
            return self._apply_mode(Unauthenticated(reason="session_lookup_failed"))

        if identity is None:
            return self._apply_mode(Unauthenticated(reason="no_session"))
        return self._apply_mode(RealSession(identity=identity))

    def handle_auth_event(self, event: AuthEvent, identity: Identity | None) -> RoleResolution:
        """Re-evaluate on every auth-state change notification."""
        if self.override_active:
            logger.debug("Auth event ignored while override active", auth_event=event.value)
            return self.resolution

        if event == AuthEvent.SIGNED_OUT or identity is None:
            return self._apply_mode(Unauthenticated(reason=event.value))
        return self._apply_mode(RealSession(identity=identity))

    def select_tab(self, tab: DashboardView) -> RoleResolution:
        if tab == DashboardView.ADMIN_CONSOLE and self.role != Role.ADMIN:
            raise ValidationError("The admin console is not available for this account")
        if tab != DashboardView.ADMIN_CONSOLE and tab not in REGULAR_TABS:
            raise ValidationError(f"Unknown tab: {tab}")
        self.active_tab = tab
        return self.resolution

    # ------------------------------------------------------------------
    # Auth actions
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> RoleResolution:
        override = match_override(email, password)
        if override is not None:
            self.access_token = None
            resolution = self._apply_mode(override)
            if isinstance(override, AdminOverride):
                self.notifier.notify("Admin Access Granted", "Welcome, Administrator!")
            else:
                self.notifier.notify("Manager Access Granted", "Welcome, Manager!")
            return resolution

        credentials = validate_credentials(email, password)
        try:
            tokens = await self.auth_service.sign_in(str(credentials.email), credentials.password)
        except AuthFailure as e:
            self.notifier.error(e)
            raise

        self.access_token = tokens.access_token
        resolution = self._apply_mode(RealSession(identity=tokens.identity))
        self.notifier.notify("Welcome back!", "Successfully logged in")
        return resolution

    async def sign_up(self, email: str, password: str, redirect_to: str | None = None) -> Identity:
        credentials = validate_credentials(email, password)
        identity = await self.auth_service.sign_up(
            str(credentials.email), credentials.password, redirect_to=redirect_to
        )
        # A real sign-up never keeps a demo override around
        if self.override_active:
            self._apply_mode(Unauthenticated(reason="sign_up"))
        self.notifier.notify("Account created!", "Please check your email to verify your account")
        return identity

    async def request_password_reset(self, email: str, redirect_to: str | None = None) -> None:
        try:
            EmailAddress(email=email)
        except PydanticValidationError as e:
            raise ValidationError("Invalid email address", title="Validation Error") from e

        await self.auth_service.reset_password_for_email(email, redirect_to=redirect_to)
        self.notifier.notify(
            "Password Reset Email Sent",
            "Please check your email for instructions to reset your password",
        )

    async def update_password(self, password: str, confirm_password: str) -> None:
        if len(password) < 6:
            raise ValidationError("Password must be at least 6 characters.", title="Weak Password")
        if password != confirm_password:
            raise ValidationError(
                "Please ensure both passwords are identical.", title="Passwords Do Not Match"
            )
        if not self.access_token:
            raise AuthFailure("No recovery session available")

        await self.auth_service.update_user(self.access_token, password)
        self.notifier.notify("Password Updated", "Your password has been reset successfully.")

    async def logout(self) -> RoleResolution:
        if isinstance(self.mode, RealSession) and self.access_token:
            try:
                await self.auth_service.sign_out(self.access_token)
            except AuthFailure as e:
                logger.warning("Sign-out call failed, clearing local session anyway", error=str(e))

        self.access_token = None
        self.active_tab = DEFAULT_TAB
        return self._apply_mode(Unauthenticated(reason="logout"))
