"""Auto-kick system manager."""

import asyncio
from typing import Optional

from .clock import Clock, SystemClock
from .config import AutoKickSettings, settings as app_settings
from .events.base import (
    PlayerDisconnectedEvent,
    PlayerSquadChangedEvent,
    RoundStartedEvent,
)
from .events.dispatcher import EventDispatcher
from .logger import log_exception, logger
from .server.gateway import ServerGateway
from .tracking.actions import GatewayActions
from .tracking.conditions import RoundPhaseTracker
from .tracking.models import AutoKickStatus
from .tracking.reconciler import ListReconciler
from .tracking.registry import TrackingRegistry


class AutoKickManager:
    """Warns and kicks players that stay unassigned for too long."""

    def __init__(
        self,
        gateway: ServerGateway,
        event_dispatcher: EventDispatcher,
        settings: Optional[AutoKickSettings] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize auto-kick manager.

        Args:
            gateway: Game server connection used for roster, warn and kick
            event_dispatcher: Event dispatcher delivering game events
            settings: Auto-kick options, defaults to the loaded settings
            clock: Time source, defaults to the system monotonic clock
        """
        self.gateway = gateway
        self.event_dispatcher = event_dispatcher
        self.settings = settings if settings is not None else app_settings.auto_kick
        self.clock = clock if clock is not None else SystemClock()

        self.registry = TrackingRegistry(
            self.settings, self.clock, GatewayActions(gateway)
        )
        self.round_phase = RoundPhaseTracker(self.clock, self.settings.grace_period)
        self.reconciler = ListReconciler(
            self.registry, self.round_phase, gateway, self.settings
        )

        self._update_task: Optional[asyncio.Task] = None
        self._cleanup_task: Optional[asyncio.Task] = None
        self._stop_flag = False

        # Register event handlers
        self.event_dispatcher.on_round_started(self._handle_round_started)
        self.event_dispatcher.on_player_squad_changed(self._handle_squad_changed)
        self.event_dispatcher.on_player_disconnected(self._handle_disconnected)

    @property
    def is_running(self) -> bool:
        return self._update_task is not None and not self._stop_flag

    async def start(self) -> None:
        """Start the reconciliation and cleanup loops."""
        if not self.settings.enabled:
            logger.info("Auto-kick of unassigned players is disabled")
            return
        if self.is_running:
            logger.warning("Auto-kick manager is already running")
            return

        logger.info(
            f"Starting auto-kick manager (kick after {self.settings.kick_timeout:.0f}s, "
            f"warn every {self.settings.warn_interval:.0f}s)"
        )
        self._stop_flag = False
        self._update_task = asyncio.create_task(self._update_loop())
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())
        logger.info("Auto-kick manager started")

    async def stop(self) -> None:
        """Stop the loops and release every tracked player."""
        logger.info("Stopping auto-kick manager...")
        self._stop_flag = True

        for task in (self._update_task, self._cleanup_task):
            if task:
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._update_task = None
        self._cleanup_task = None

        self.registry.stop_all()
        logger.info("Auto-kick manager stopped")

    def status(self) -> AutoKickStatus:
        phase = self.round_phase.current()
        grace_remaining = None
        if phase.grace_deadline is not None:
            grace_remaining = max(phase.grace_deadline - self.clock.now(), 0)

        return AutoKickStatus(
            enabled=self.settings.enabled,
            running=self.is_running,
            between_rounds=phase.between_rounds,
            grace_remaining_seconds=grace_remaining,
            tracked=self.registry.statuses(),
        )

    async def _update_loop(self) -> None:
        """Reconciliation loop."""
        while not self._stop_flag:
            try:
                await self.reconciler.reconcile()
            except Exception as e:
                logger.error(f"Error in reconciliation loop: {e}", exc_info=True)

            await self.clock.sleep(self.settings.update_interval_seconds)

    async def _cleanup_loop(self) -> None:
        """Cleanup loop for players that left while tracked."""
        while not self._stop_flag:
            await self.clock.sleep(self.settings.cleanup_interval_seconds)
            if self._stop_flag:
                break

            try:
                await self.reconciler.cleanup()
            except Exception as e:
                logger.error(f"Error in tracking cleanup loop: {e}", exc_info=True)

    @log_exception("Error handling round start")
    async def _handle_round_started(self, event: RoundStartedEvent) -> None:
        """Handle round start - pause tracking for the grace period.

        Args:
            event: Round started event
        """
        self.round_phase.begin_round()
        if not self.is_running:
            return

        try:
            await self.reconciler.reconcile()
        except Exception as e:
            # Population overrides cannot be checked without a roster
            logger.warning(
                f"Roster unavailable at round start ({e}), "
                "releasing every tracked player"
            )
            self.registry.stop_all()

    @log_exception("Error handling squad change")
    async def _handle_squad_changed(self, event: PlayerSquadChangedEvent) -> None:
        """Handle squad change - release a tracked player who joined a squad.

        Args:
            event: Player squad change event
        """
        if event.squad_id is not None and self.registry.is_tracked(event.player_id):
            self.registry.stop_tracking(event.player_id)

    @log_exception("Error handling player disconnect")
    async def _handle_disconnected(self, event: PlayerDisconnectedEvent) -> None:
        """Handle disconnect - release a tracked player who left the server.

        Args:
            event: Player disconnected event
        """
        if self.registry.is_tracked(event.player_id):
            self.registry.stop_tracking(event.player_id)
