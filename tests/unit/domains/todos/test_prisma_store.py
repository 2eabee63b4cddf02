"""
Tests for the Prisma-backed todo store, against a mocked client.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from todo_api.domains.todos.prisma_store import PrismaTodoStore
from todo_api.domains.todos.types import Todo

NOW = datetime(2024, 1, 15, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_prisma() -> Mock:
    mock_db = Mock()
    mock_db.todo.create = AsyncMock()
    mock_db.todo.find_unique = AsyncMock()
    mock_db.todo.find_many = AsyncMock()
    mock_db.todo.update = AsyncMock()
    mock_db.todo.delete_many = AsyncMock()
    return mock_db


@pytest.fixture
def todo_record() -> Mock:
    record = Mock()
    record.id = "todo-1"
    record.organizationId = "org-1"
    record.createdBy = "user-1"
    record.title = "Ship"
    record.description = None
    record.completed = False
    record.createdAt = NOW
    record.updatedAt = NOW
    record.completedAt = None
    return record


class TestPrismaTodoStore:
    @pytest.mark.asyncio
    async def test_find_by_id_maps_record(self, mock_prisma: Mock, todo_record: Mock):
        mock_prisma.todo.find_unique.return_value = todo_record

        result = await PrismaTodoStore(mock_prisma).find_by_id("todo-1")

        assert result == Todo(
            id="todo-1",
            organization_id="org-1",
            created_by="user-1",
            title="Ship",
            description=None,
            completed=False,
            created_at=NOW,
            updated_at=NOW,
        )

    @pytest.mark.asyncio
    async def test_list_newest_first(self, mock_prisma: Mock, todo_record: Mock):
        mock_prisma.todo.find_many.return_value = [todo_record]

        result = await PrismaTodoStore(mock_prisma).find_by_organization_id("org-1")

        assert [t.id for t in result] == ["todo-1"]
        mock_prisma.todo.find_many.assert_awaited_once_with(
            where={"organizationId": "org-1"}, order={"createdAt": "desc"}
        )

    @pytest.mark.asyncio
    async def test_delete(self, mock_prisma: Mock):
        await PrismaTodoStore(mock_prisma).delete("todo-1")

        mock_prisma.todo.delete_many.assert_awaited_once_with(where={"id": "todo-1"})
