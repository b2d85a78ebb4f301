"""
Admin console: user list, selection, bulk actions and realtime refresh.

Mutations are commands returning Committed or Rejected. Single-row edits show
an optimistic overlay on top of the base list; the overlay is folded into the
base list on commit and dropped on rejection. Refreshes merge by record
version, so a stale fetch never replaces a newer local edit.
"""

import uuid
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from datetime import UTC, datetime

from networknote.config import settings
from networknote.errors import AuthFailure, PermissionDenied, PersistenceFailure, ValidationError
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.directory_domain import (
    AdminUser,
    BillingStatus,
    ChangeEvent,
    ChangeEventType,
    CommandResult,
    Committed,
    NewUserDraft,
    Rejected,
    UserStats,
)
from networknote.models.domain.session_domain import Role
from networknote.repositories.user_accounts_repository import UserAccountsRepository
from networknote.services.demo_data import demo_users
from networknote.services.notifications import NotificationChannel
from networknote.services.pagination import Page, PageCursor, filter_by_term
from networknote.services.selection import SelectionSet
from networknote.services.supabase_auth_service import SupabaseAuthService, supabase_auth

logger = get_logger(__name__)

ROWS_PER_PAGE_OPTIONS = (10, 25, 50)

CHANGE_NOTICES = {
    ChangeEventType.INSERT: ("New User Created", "User list has been updated."),
    ChangeEventType.UPDATE: ("User Updated", "User list has been refreshed."),
    ChangeEventType.DELETE: ("User Deleted", "User list has been updated."),
}

SEARCH_FIELDS = [
    lambda user: user.name,
    lambda user: user.email,
    lambda user: user.role,
    lambda user: user.manager,
]


def merge_by_version(local: list[AdminUser], fetched: list[AdminUser]) -> list[AdminUser]:
    """Fetched order and membership; per record, the higher version wins."""
    current = {user.id: user for user in local}
    merged = []
    for user in fetched:
        mine = current.get(user.id)
        merged.append(mine if mine is not None and mine.version > user.version else user)
    return merged


class AdminConsole:
    def __init__(
        self,
        role: Role,
        actor_name: str,
        repository: type[UserAccountsRepository] = UserAccountsRepository,
        auth_service: SupabaseAuthService | None = None,
        notifier: NotificationChannel | None = None,
        rows_per_page: int | None = None,
    ):
        if role not in (Role.ADMIN, Role.MANAGER):
            raise PermissionDenied("Admin console requires the admin or manager role")

        self.role = role
        self.actor_name = actor_name
        self.repository = repository
        self.auth_service = auth_service or supabase_auth
        self.notifier = notifier or NotificationChannel()
        self.selection = SelectionSet()
        self.cursor = PageCursor(rows_per_page or settings.ADMIN_ROWS_PER_PAGE)
        self.search_term = ""
        self.demo_mode = False
        self.assign_modal_open = False
        self._users: list[AdminUser] = []
        self._overlay: dict[str, AdminUser] = {}
        # Users created while in demo mode; never persisted
        self._local_ids: set[str] = set()

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    def _require(self, *roles: Role) -> None:
        if self.role not in roles:
            raise PermissionDenied(f"Requires role: {', '.join(role.value for role in roles)}")

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def users(self) -> list[AdminUser]:
        """Base list with any pending optimistic edits applied."""
        return [self._overlay.get(user.id, user) for user in self._users]

    def _scoped(self, users: list[AdminUser]) -> list[AdminUser]:
        if self.is_manager:
            return [user for user in users if user.manager == self.actor_name]
        return users

    async def _load(self) -> list[AdminUser]:
        try:
            fetched = await self.repository.list_users(
                manager=self.actor_name if self.is_manager else None
            )
            self.demo_mode = False
        except PersistenceFailure as e:
            logger.warning("User list fetch failed, using demo data", error=e.message)
            if not self.demo_mode:
                self.notifier.notify(
                    e.title,
                    "Unable to connect to database. Please check your connection.",
                    "destructive",
                )
            self.demo_mode = True
            fetched = demo_users()
        return self._scoped(fetched)

    def _merge(self, fetched: list[AdminUser]) -> list[AdminUser]:
        merged = merge_by_version(self._users, fetched)
        if not self.demo_mode:
            self._local_ids.clear()
            return merged
        fetched_ids = {user.id for user in fetched}
        local = [
            user
            for user in self._users
            if user.id in self._local_ids and user.id not in fetched_ids
        ]
        return [*local, *merged]

    async def refresh(self) -> list[AdminUser]:
        self._users = self._merge(await self._load())

        pruned = self.selection.prune(user.id for user in self._users)
        if pruned:
            logger.info("Pruned selection after refresh", pruned_ids=pruned)
            self._users = self._merge(await self._load())
            self.selection.prune(user.id for user in self._users)

        self.cursor.resize(len(self.visible_users()))
        logger.debug("User list refreshed", user_count=len(self._users), demo_mode=self.demo_mode)
        return self.users

    def visible_users(self) -> list[AdminUser]:
        return filter_by_term(self._scoped(self.users), self.search_term, SEARCH_FIELDS)

    def set_search(self, term: str) -> list[AdminUser]:
        self.search_term = term or ""
        self.cursor.resize(len(self.visible_users()))
        return self.visible_users()

    def set_rows_per_page(self, rows: int) -> None:
        if rows not in ROWS_PER_PAGE_OPTIONS:
            raise ValidationError(
                f"Rows per page must be one of {', '.join(map(str, ROWS_PER_PAGE_OPTIONS))}",
                title="Invalid page size",
            )
        self.cursor.set_page_size(rows, len(self.visible_users()))

    def page(self, page_number: int | None = None) -> Page[AdminUser]:
        visible = self.visible_users()
        if page_number is not None:
            self.cursor.go_to(page_number, len(visible))
        return self.cursor.page(visible)

    def stats(self) -> UserStats:
        users = self._scoped(self.users)
        paid = sum(1 for user in users if user.status == "paid")
        return UserStats(total=len(users), paid=paid, unpaid=len(users) - paid)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle(self, user_id: str) -> bool:
        return self.selection.toggle(user_id)

    def toggle_all_visible(self) -> None:
        self.selection.toggle_all(user.id for user in self.visible_users())

    def selected_users(self) -> list[AdminUser]:
        selected = set(self.selection.selected_ids())
        return [user for user in self.users if user.id in selected]

    def _require_selection(self) -> list[AdminUser]:
        selected = self.selected_users()
        if not selected:
            raise ValidationError("Please select at least one user.", title="No users selected")
        return selected

    # ------------------------------------------------------------------
    # Bulk actions
    # ------------------------------------------------------------------

    def open_assign_modal(self) -> list[AdminUser]:
        self._require(Role.ADMIN)
        selected = self._require_selection()
        self.assign_modal_open = True
        return selected

    async def assign_owner(self, owner: str) -> CommandResult:
        """Assign every selected user to `owner`.

        On commit the list update, the selection clear and the modal close
        happen together. On rejection none of them happen.
        """
        self._require(Role.ADMIN)
        selected = self._require_selection()
        owner = (owner or "").strip()
        if not owner:
            raise ValidationError(
                "Please select an owner to assign the leads to.",
                title="No owner selected",
                missing_fields=["owner"],
            )

        ids = {user.id for user in selected}
        if not self.demo_mode:
            try:
                await self.repository.assign_manager(sorted(ids), owner)
            except PersistenceFailure as e:
                self.notifier.error(e)
                return Rejected(reason=e.message, error=e)

        updated = [
            user.model_copy(update={"manager": owner, "version": user.version + 1})
            if user.id in ids
            else user
            for user in self._users
        ]
        self._users = updated
        for user_id in ids:
            self._overlay.pop(user_id, None)
        self.selection.clear()
        self.assign_modal_open = False

        names = ", ".join(user.name for user in selected)
        self.notifier.notify("Leads Assigned", f"Assigned {len(selected)} leads ({names}) to {owner}")
        logger.info("Leads assigned", owner=owner, user_count=len(ids), demo_mode=self.demo_mode)
        return Committed([user for user in updated if user.id in ids])

    async def create_user(self, draft: NewUserDraft) -> CommandResult:
        self._require(Role.ADMIN, Role.MANAGER)

        missing = [field for field in ("name", "email") if not getattr(draft, field).strip()]
        if missing:
            raise ValidationError.for_missing(missing)

        if self.is_manager:
            draft = draft.model_copy(update={"role": Role.USER.value, "manager": self.actor_name})

        if self.demo_mode:
            user = AdminUser(
                id=f"local-{uuid.uuid4().hex[:8]}",
                name=draft.name,
                email=draft.email,
                role=draft.role,
                manager=draft.manager,
                status=draft.status,
                created_at=datetime.now(UTC).date().isoformat(),
            )
            self._users = [user, *self._users]
            self._local_ids.add(user.id)
            self.notifier.notify(
                "User Created (Demo Mode)",
                f"Successfully created user: {draft.name}. This is demo data only.",
            )
            return Committed(user)

        try:
            identity = await self.auth_service.admin_create_user(
                draft.email, user_metadata={"full_name": draft.name, "role": draft.role}
            )
            user = await self.repository.insert_user(
                identity.user_id, draft.name, draft.email, draft.role, draft.manager, draft.status
            )
        except (AuthFailure, PersistenceFailure) as e:
            logger.error("User creation failed", email=draft.email, error=e.message)
            self.notifier.error(e, "Failed to create user. Please try again.")
            return Rejected(reason=e.message, error=e)

        try:
            await self.auth_service.reset_password_for_email(
                draft.email, redirect_to=f"{settings.PUBLIC_BASE_URL.rstrip('/')}/auth"
            )
        except AuthFailure as e:
            logger.error("Welcome email failed", email=draft.email, error=e.message)

        self.notifier.notify(
            "User Created Successfully",
            f"{draft.name} has been created and will receive a welcome email to set their password.",
        )
        await self.refresh()
        return Committed(user)

    # ------------------------------------------------------------------
    # Single-row edits
    # ------------------------------------------------------------------

    async def change_manager(self, user_id: str, manager: str) -> CommandResult:
        manager = (manager or "").strip()
        if not manager:
            raise ValidationError.for_missing(["manager"])
        return await self._edit(
            user_id,
            "manager",
            manager,
            self.repository.update_manager,
            ("Manager Updated", "Manager assignment saved successfully."),
        )

    async def change_status(self, user_id: str, status: BillingStatus) -> CommandResult:
        if status not in ("paid", "unpaid"):
            raise ValidationError(f"Unknown billing status '{status}'", title="Invalid status")
        return await self._edit(
            user_id,
            "status",
            status,
            self.repository.update_status,
            ("Status Updated", "Billing status updated successfully."),
        )

    async def _edit(
        self,
        user_id: str,
        field: str,
        value: str,
        persist: Callable[[str, str], Awaitable[AdminUser]],
        notice: tuple[str, str],
    ) -> CommandResult:
        self._require(Role.ADMIN, Role.MANAGER)
        base = next((user for user in self._users if user.id == user_id), None)
        if base is None:
            raise ValidationError(f"User {user_id} is not in the list", title="Unknown user")

        optimistic = self._overlay.get(user_id, base).model_copy(
            update={field: value, "version": base.version + 1}
        )
        self._overlay[user_id] = optimistic

        if self.demo_mode:
            self._commit(user_id, optimistic, optimistic)
            return Committed(optimistic)

        try:
            saved = await persist(user_id, value)
        except PersistenceFailure as e:
            if self._overlay.get(user_id) is optimistic:
                del self._overlay[user_id]
            logger.warning("Edit rolled back", user_id=user_id, field=field, error=e.message)
            self.notifier.error(e)
            return Rejected(reason=e.message, error=e)

        self._commit(user_id, saved, optimistic)
        self.notifier.notify(*notice)
        return Committed(saved)

    def _commit(self, user_id: str, saved: AdminUser, optimistic: AdminUser) -> None:
        self._users = [saved if user.id == user_id else user for user in self._users]
        if self._overlay.get(user_id) is optimistic:
            del self._overlay[user_id]

    # ------------------------------------------------------------------
    # Realtime
    # ------------------------------------------------------------------

    async def handle_change(self, event: ChangeEvent) -> None:
        logger.info("User account change detected", event_type=event.event_type.value)
        await self.refresh()
        title, description = CHANGE_NOTICES[event.event_type]
        self.notifier.notify(title, description)

    async def changes(self, feed: AsyncIterable[ChangeEvent]) -> AsyncIterator[ChangeEvent]:
        """Handle each event from `feed`, yielding it once the list is refreshed."""
        async for event in feed:
            await self.handle_change(event)
            yield event

    async def watch(self, feed: AsyncIterable[ChangeEvent]) -> None:
        async for _ in self.changes(feed):
            pass
