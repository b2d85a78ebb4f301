"""
Persistence for managed user accounts (`user_accounts` table).
"""

from collections.abc import Sequence

from networknote.db.helpers import execute_query, fetch_all, fetch_one, with_db_retry
from networknote.errors import PersistenceFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.directory_domain import AdminUser, BillingStatus

logger = get_logger(__name__)

_COLUMNS = "id, full_name, email, role, manager, status, created_at, last_sign_in_at, updated_at"


class UserAccountsRepository:
    """Reads and writes on user_accounts. Every write bumps updated_at."""

    @classmethod
    @with_db_retry()
    async def list_users(cls, manager: str | None = None) -> list[AdminUser]:
        if manager is None:
            query = f"SELECT {_COLUMNS} FROM user_accounts ORDER BY created_at DESC"
            params: tuple = ()
        else:
            query = f"""
                SELECT {_COLUMNS}
                FROM user_accounts
                WHERE manager = %s
                ORDER BY created_at DESC
            """
            params = (manager,)

        rows = await fetch_all(query, params)
        return [AdminUser.from_row(row, index) for index, row in enumerate(rows)]

    @classmethod
    async def insert_user(
        cls,
        user_id: str,
        full_name: str,
        email: str,
        role: str,
        manager: str,
        status: BillingStatus,
    ) -> AdminUser:
        query = f"""
            INSERT INTO user_accounts (id, full_name, email, role, manager, status, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, NOW())
            RETURNING {_COLUMNS}
        """
        row = await fetch_one(query, (user_id, full_name, email, role, manager, status))
        if row is None:
            raise PersistenceFailure("Insert returned no row", operation="insert_user")

        logger.info("User account inserted", user_id=user_id, role=role, manager=manager)
        return AdminUser.from_row(row)

    @classmethod
    async def update_manager(cls, user_id: str, manager: str) -> AdminUser:
        return await cls._update_field(user_id, "manager", manager)

    @classmethod
    async def update_status(cls, user_id: str, status: BillingStatus) -> AdminUser:
        return await cls._update_field(user_id, "status", status)

    @classmethod
    async def _update_field(cls, user_id: str, column: str, value: str) -> AdminUser:
        # column is one of our own literals, never user input
        query = f"""
            UPDATE user_accounts
            SET {column} = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING {_COLUMNS}
        """
        row = await fetch_one(query, (value, user_id))
        if row is None:
            raise PersistenceFailure(f"User {user_id} not found", operation=f"update_{column}")

        logger.info("User account updated", user_id=user_id, field=column)
        return AdminUser.from_row(row)

    @classmethod
    async def assign_manager(cls, user_ids: Sequence[str], manager: str) -> int:
        """Set the manager on every listed user in one statement."""
        if not user_ids:
            return 0

        query = """
            UPDATE user_accounts
            SET manager = %s, updated_at = NOW()
            WHERE id = ANY(%s)
        """
        affected = await execute_query(query, (manager, list(user_ids)))

        logger.info("Users assigned to manager", manager=manager, requested=len(user_ids), affected=affected)
        return affected
