import pytest

from afk_kicker.config import AutoKickSettings
from afk_kicker.events.dispatcher import EventDispatcher
from afk_kicker.tracking.actions import GatewayActions
from afk_kicker.tracking.conditions import RoundPhaseTracker
from afk_kicker.tracking.reconciler import ListReconciler
from afk_kicker.tracking.registry import TrackingRegistry

from tests.fixtures.clock import ManualClock, settle
from tests.fixtures.server import FakeServerGateway


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def gateway(clock):
    return FakeServerGateway(clock)


@pytest.fixture
def auto_kick_settings():
    """Default plugin timings with the population overrides disabled."""
    return AutoKickSettings(
        warning_message="Join a squad",
        kick_message="Unassigned - automatically removed",
        frequency_of_warnings=30,
        afk_timer=6,
        player_threshold=-1,
        queue_threshold=-1,
        round_start_delay=15,
        update_interval_seconds=60,
        cleanup_interval_seconds=1200,
        roster_timeout_seconds=0.05,
    )


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
async def registry(auto_kick_settings, clock, gateway):
    registry = TrackingRegistry(auto_kick_settings, clock, GatewayActions(gateway))
    yield registry
    registry.stop_all()
    await settle()


@pytest.fixture
def round_phase(auto_kick_settings, clock):
    return RoundPhaseTracker(clock, auto_kick_settings.grace_period)


@pytest.fixture
def reconciler(registry, round_phase, gateway, auto_kick_settings):
    return ListReconciler(registry, round_phase, gateway, auto_kick_settings)
