"""
Unit tests for the background job scheduler registry.
"""

from unittest.mock import AsyncMock, patch

import pytest
from apscheduler.triggers.interval import IntervalTrigger

from ictreg.core import scheduler


@pytest.fixture
def registry():
    """An empty job registry with no running scheduler."""
    with (
        patch.object(scheduler, "_job_registry", {}),
        patch.object(scheduler, "_scheduler", None),
    ):
        yield scheduler._job_registry


class TestRegistry:
    def test_scheduling_without_scheduler_raises(self, registry):
        """Scheduling a job requires a started scheduler."""
        with pytest.raises(RuntimeError):
            scheduler._add_to_scheduler("repair", AsyncMock(), IntervalTrigger(hours=1))

    def test_register_before_start_only_queues(self, registry):
        scheduler.register_job("repair", AsyncMock(), IntervalTrigger(hours=1))

        assert "repair" in registry
        assert scheduler.list_registered_jobs() == [
            {"job_id": "repair", "registered": True, "next_run_time": None, "is_paused": True}
        ]

    @pytest.mark.asyncio
    async def test_manual_trigger_runs_job(self, registry):
        job = AsyncMock(return_value={"repaired": 2})
        scheduler.register_job("repair", job, IntervalTrigger(hours=1))

        outcome = await scheduler.trigger_job_manually("repair")

        assert outcome["status"] == "success"
        assert outcome["result"] == {"repaired": 2}
        job.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_manual_trigger_unknown_job(self, registry):
        with pytest.raises(ValueError):
            await scheduler.trigger_job_manually("missing")

    @pytest.mark.asyncio
    async def test_manual_trigger_reports_failure(self, registry):
        scheduler.register_job("repair", AsyncMock(side_effect=RuntimeError("db down")), None)

        outcome = await scheduler.trigger_job_manually("repair")

        assert outcome == {
            "job_id": "repair",
            "status": "error",
            "executed_at": outcome["executed_at"],
            "error": "db down",
        }

    def test_pause_unscheduled_job(self, registry):
        assert scheduler.pause_job("repair") is False
