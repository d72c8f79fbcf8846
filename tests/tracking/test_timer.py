"""Tests for the per-player warn/kick timer."""

import pytest

from afk_kicker.errors import InvalidConfigurationError
from afk_kicker.tracking.actions import GatewayActions
from afk_kicker.tracking.timer import PlayerTimer, format_remaining

from tests.fixtures.clock import settle


def make_timer(clock, gateway, kicked, warn_interval=30.0, kick_timeout=360.0):
    return PlayerTimer(
        "76561198000000001",
        clock.now(),
        warn_interval=warn_interval,
        kick_timeout=kick_timeout,
        warning_message="Join a squad",
        kick_message="Unassigned - automatically removed",
        clock=clock,
        actions=GatewayActions(gateway),
        on_kicked=kicked.append,
    )


class TestFormatRemaining:
    """Test remaining time text."""

    def test_minutes_and_seconds(self):
        assert format_remaining(330) == "5:30"
        assert format_remaining(30) == "0:30"
        assert format_remaining(65.9) == "1:05"

    def test_truncates_fractions(self):
        assert format_remaining(59.999) == "0:59"
        assert format_remaining(120.5) == "2:00"

    def test_never_negative(self):
        assert format_remaining(-3) == "0:00"


class TestPlayerTimer:
    """Test warning and kick scheduling."""

    @pytest.mark.parametrize(
        "warn_interval,kick_timeout", [(0, 360), (-1, 360), (30, 0), (30, -5)]
    )
    def test_rejects_non_positive_durations(
        self, clock, gateway, warn_interval, kick_timeout
    ):
        with pytest.raises(InvalidConfigurationError):
            make_timer(clock, gateway, [], warn_interval, kick_timeout)

    @pytest.mark.asyncio
    async def test_full_schedule(self, clock, gateway):
        """Warnings every 30s up to 330s, then exactly one kick at 360s."""
        kicked = []
        timer = make_timer(clock, gateway, kicked)
        timer.start()

        await clock.advance(359)
        assert [w.at for w in gateway.warnings] == [30.0 * n for n in range(1, 12)]
        assert gateway.kicks == []
        assert timer.active

        await clock.advance(100)
        assert len(gateway.kicks) == 1
        assert gateway.kicks[0].at == 360
        assert gateway.kicks[0].message == "Unassigned - automatically removed"
        assert len(gateway.warnings) == 11
        assert kicked == [timer]
        assert timer.kicked
        assert not timer.active

    @pytest.mark.asyncio
    async def test_remaining_time_measured_from_start(self, clock, gateway):
        timer = make_timer(clock, gateway, [])
        timer.start()

        await clock.advance(95)
        messages = [w.message for w in gateway.warnings]
        assert messages == [
            "Join a squad - 5:30",
            "Join a squad - 5:00",
            "Join a squad - 4:30",
        ]
        assert timer.warnings_sent == 3
        assert timer.remaining() == 265

        timer.cancel()
        await settle()

    @pytest.mark.asyncio
    async def test_cancel_silences_everything(self, clock, gateway):
        kicked = []
        timer = make_timer(clock, gateway, kicked)
        timer.start()

        await clock.advance(45)
        timer.cancel()

        await clock.advance(1000)
        assert [w.at for w in gateway.warnings] == [30]
        assert gateway.kicks == []
        assert kicked == []
        assert timer.cancelled
        assert not timer.active

    @pytest.mark.asyncio
    async def test_cancel_at_fire_time_wins(self, clock, gateway):
        """A cancel issued before a due fire runs suppresses that fire."""
        timer = make_timer(clock, gateway, [])
        timer.start()
        await clock.advance(29)

        timer.cancel()
        await clock.advance(1)

        assert gateway.warnings == []

    @pytest.mark.asyncio
    async def test_cancel_is_repeatable(self, clock, gateway):
        timer = make_timer(clock, gateway, [])
        timer.start()

        timer.cancel()
        timer.cancel()
        await clock.advance(400)

        assert gateway.warnings == []
        assert gateway.kicks == []

    @pytest.mark.asyncio
    async def test_cannot_start_twice(self, clock, gateway):
        timer = make_timer(clock, gateway, [])
        timer.start()

        with pytest.raises(RuntimeError):
            timer.start()

        timer.cancel()
        await settle()

    @pytest.mark.asyncio
    async def test_kick_without_intermediate_warning(self, clock, gateway):
        """An interval longer than the timeout only yields the kick."""
        kicked = []
        timer = make_timer(clock, gateway, kicked, warn_interval=600, kick_timeout=60)
        timer.start()

        await clock.advance(700)

        assert gateway.warnings == []
        assert [k.at for k in gateway.kicks] == [60]

    @pytest.mark.asyncio
    async def test_warn_task_waits_for_kick(self, clock, gateway):
        """The warn task outlives its last warning until the kick fires."""
        timer = make_timer(clock, gateway, [], warn_interval=600, kick_timeout=60)
        timer.start()

        await clock.advance(59)
        assert not timer._warn_task.done()
        assert timer.active

        await clock.advance(1)
        await settle()
        assert [k.at for k in gateway.kicks] == [60]
        assert timer._warn_task.done()
        assert not timer.active

    @pytest.mark.asyncio
    async def test_failed_kick_still_reports_teardown(self, clock, gateway, caplog):
        gateway.fail_kick = True
        kicked = []
        timer = make_timer(clock, gateway, kicked)
        timer.start()

        await clock.advance(360)

        assert kicked == [timer]
        assert not timer.kicked
        assert "Failed to kick player 76561198000000001" in caplog.text

    @pytest.mark.asyncio
    async def test_failed_warning_keeps_schedule(self, clock, gateway, caplog):
        gateway.fail_warn = True
        timer = make_timer(clock, gateway, [])
        timer.start()

        await clock.advance(90)
        gateway.fail_warn = False
        await clock.advance(30)

        assert [w.at for w in gateway.warnings] == [120]
        assert caplog.text.count("Failed to warn player 76561198000000001") == 3
        assert timer.warnings_sent == 1

        timer.cancel()
        await settle()
