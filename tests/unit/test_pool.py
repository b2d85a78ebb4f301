import pytest

from networknote.db.pool import DatabasePoolManager


@pytest.mark.asyncio
async def test_health_check_before_initialize():
    health = await DatabasePoolManager("postgresql://unused").health_check()

    assert health["healthy"] is False
    assert health["error"] == "Pool not initialized"


@pytest.mark.asyncio
async def test_connection_requires_initialize():
    manager = DatabasePoolManager("postgresql://unused")

    with pytest.raises(RuntimeError, match="not initialized"):
        async with manager.connection():
            pass


@pytest.mark.asyncio
async def test_close_without_pool_is_noop():
    manager = DatabasePoolManager("postgresql://unused")
    await manager.close()

    assert manager.initialized is False
