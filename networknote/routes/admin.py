"""
admin.py
--------
Purpose:
    Admin console endpoints for managed user accounts.

    - Admins see every user; managers see only users assigned to them.
    - Assigning owners in bulk is admin only.
    - GET /admin/users/changes streams the refreshed list as server-sent
      events whenever user_accounts changes.
    - Mutations answer with a CommandResponse: "committed" with the updated
      rows, or "rejected" with the reason and the list unchanged.
"""

from collections.abc import AsyncIterable, AsyncIterator

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, StreamingResponse

from networknote.auth.verify import SessionContext, admin_only, admin_or_manager
from networknote.db.realtime import UserAccountsFeed
from networknote.errors import PersistenceFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.api.admin_request import (
    AssignOwnerRequest,
    CreateUserRequest,
    ManagerChangeRequest,
    StatusChangeRequest,
)
from networknote.models.api.admin_response import (
    AdminUsersResponse,
    ChangeStreamEvent,
    CommandResponse,
)
from networknote.models.domain.directory_domain import (
    ChangeEvent,
    CommandResult,
    Committed,
    NewUserDraft,
)
from networknote.repositories.user_accounts_repository import UserAccountsRepository
from networknote.services.admin_console import AdminConsole
from networknote.services.demo_data import MOCK_MANAGERS
from networknote.services.supabase_auth_service import SupabaseAuthService, get_supabase_auth

router = APIRouter(prefix="/admin", tags=["admin"])
logger = get_logger(__name__)


def get_user_accounts_repository() -> type[UserAccountsRepository]:
    return UserAccountsRepository


def get_change_feed() -> AsyncIterable[ChangeEvent]:
    return UserAccountsFeed()


async def get_console(
    session: SessionContext,
    repository: type[UserAccountsRepository],
    auth_service: SupabaseAuthService,
) -> AdminConsole:
    console = AdminConsole(session.role, session.actor_name, repository, auth_service)
    await console.refresh()
    return console


def _command_response(
    console: AdminConsole, result: CommandResult, success_status: int = status.HTTP_200_OK
) -> JSONResponse:
    if isinstance(result, Committed):
        value = result.value
        users = value if isinstance(value, list) else [value]
        payload = CommandResponse(
            outcome="committed",
            users=users,
            demo_mode=console.demo_mode,
            notifications=console.notifier.drain(),
        )
        code = success_status
    else:
        payload = CommandResponse(
            outcome="rejected",
            reason=result.reason,
            demo_mode=console.demo_mode,
            notifications=console.notifier.drain(),
        )
        code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if isinstance(result.error, PersistenceFailure)
            else status.HTTP_400_BAD_REQUEST
        )
    return JSONResponse(status_code=code, content=payload.model_dump(mode="json"))


@router.get("/users", response_model=AdminUsersResponse)
async def list_users(
    search: str = Query("", max_length=100),
    page: int = Query(1),
    rows_per_page: int = Query(10),
    session: SessionContext = Depends(admin_or_manager),
    repository: type[UserAccountsRepository] = Depends(get_user_accounts_repository),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    console = await get_console(session, repository, auth_service)
    console.set_rows_per_page(rows_per_page)
    console.set_search(search)
    users = console.page(page)

    return AdminUsersResponse(
        users=users.items,
        page=users.page_number,
        rows_per_page=users.page_size,
        total_pages=users.total_pages,
        total_users=users.total_items,
        stats=console.stats(),
        managers=MOCK_MANAGERS,
        demo_mode=console.demo_mode,
        notifications=console.notifier.drain(),
    )


@router.post("/users")
async def create_user(
    body: CreateUserRequest,
    session: SessionContext = Depends(admin_or_manager),
    repository: type[UserAccountsRepository] = Depends(get_user_accounts_repository),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    console = await get_console(session, repository, auth_service)
    result = await console.create_user(NewUserDraft(**body.model_dump()))
    return _command_response(console, result, status.HTTP_201_CREATED)


@router.post("/users/assign-owner")
async def assign_owner(
    body: AssignOwnerRequest,
    session: SessionContext = Depends(admin_only),
    repository: type[UserAccountsRepository] = Depends(get_user_accounts_repository),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    console = await get_console(session, repository, auth_service)
    for user_id in dict.fromkeys(body.user_ids):
        console.toggle(user_id)

    console.open_assign_modal()
    result = await console.assign_owner(body.owner)
    return _command_response(console, result)


@router.patch("/users/{user_id}/manager")
async def change_manager(
    user_id: str,
    body: ManagerChangeRequest,
    session: SessionContext = Depends(admin_or_manager),
    repository: type[UserAccountsRepository] = Depends(get_user_accounts_repository),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    console = await get_console(session, repository, auth_service)
    result = await console.change_manager(user_id, body.manager)
    return _command_response(console, result)


@router.patch("/users/{user_id}/status")
async def change_status(
    user_id: str,
    body: StatusChangeRequest,
    session: SessionContext = Depends(admin_or_manager),
    repository: type[UserAccountsRepository] = Depends(get_user_accounts_repository),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    console = await get_console(session, repository, auth_service)
    result = await console.change_status(user_id, body.status)
    return _command_response(console, result)


async def _change_events(
    console: AdminConsole, feed: AsyncIterable[ChangeEvent]
) -> AsyncIterator[str]:
    try:
        async for event in console.changes(feed):
            payload = ChangeStreamEvent(
                event_type=event.event_type.value,
                users=console.visible_users(),
                stats=console.stats(),
                notifications=console.notifier.drain(),
            )
            yield f"event: change\ndata: {payload.model_dump_json()}\n\n"
    except PersistenceFailure as e:
        logger.error("Change stream ended", operation=e.operation, error=e.message)
        yield f"event: error\ndata: {e.message}\n\n"


@router.get("/users/changes")
async def stream_changes(
    session: SessionContext = Depends(admin_or_manager),
    repository: type[UserAccountsRepository] = Depends(get_user_accounts_repository),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
    feed: AsyncIterable[ChangeEvent] = Depends(get_change_feed),
):
    console = await get_console(session, repository, auth_service)
    return StreamingResponse(
        _change_events(console, feed),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
