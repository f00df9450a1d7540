"""
Statement-level tests for the duplicate guard query.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from ictreg.modules.students.repository import exists_by_email_or_phone


def _sql(mock_db):
    statement = mock_db.execute.await_args.args[0]
    compiled = statement.compile(dialect=postgresql.dialect())
    return " ".join(str(compiled).split()), compiled.params


class TestExistsByEmailOrPhone:
    """Tests for exists_by_email_or_phone."""

    @pytest.mark.asyncio
    async def test_email_or_phone(self, mock_db):
        mock_db.execute.return_value = MagicMock(scalar=MagicMock(return_value=True))

        assert await exists_by_email_or_phone(mock_db, "ada@example.com", "08012345678") is True

        sql, params = _sql(mock_db)
        assert "EXISTS" in sql
        assert "students.email = %(email_1)s OR students.phone = %(phone_1)s" in sql
        assert params == {"email_1": "ada@example.com", "phone_1": "08012345678"}

    @pytest.mark.asyncio
    async def test_email_only(self, mock_db):
        mock_db.execute.return_value = MagicMock(scalar=MagicMock(return_value=False))

        assert await exists_by_email_or_phone(mock_db, "ada@example.com", None) is False

        sql, params = _sql(mock_db)
        assert " OR " not in sql
        assert params == {"email_1": "ada@example.com"}

    @pytest.mark.asyncio
    async def test_nothing_to_check(self, mock_db):
        assert await exists_by_email_or_phone(mock_db, None, "") is False
        mock_db.execute.assert_not_called()
