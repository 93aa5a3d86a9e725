import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from app_config import AppConfig, AppConfigurationError, load_app_config
from app_config_parser import log_level
from pomodoro import AsyncioScheduler, ConfigurationBoundPhaseSequencer
from pomodoro.constants import EVENT_SETTINGS_CHANGE
from runtime import CommandDispatcher, TimerEventPublisher, status_message
from server import EventServerConfig, EventStreamServer, ServerConfigurationError
from settings import SettingsError, SettingsFileWatcher, SettingsStore


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("phase_timer")


def setup_signal_handlers(loop: asyncio.AbstractEventLoop, stop_event: asyncio.Event) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""
    for signum in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(signum, stop_event.set)
        except NotImplementedError:  # pragma: no cover - Windows event loops
            signal.signal(signum, lambda *_: loop.call_soon_threadsafe(stop_event.set))


async def run(app_config: AppConfig, logger: logging.Logger) -> int:
    """Wire settings, sequencer, and event server on the running loop."""
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()
    setup_signal_handlers(loop, stop_event)

    scheduler = AsyncioScheduler(loop)
    store = SettingsStore(
        Path(app_config.timer.settings_file),
        logger=logging.getLogger("settings"),
    )
    try:
        timer = await ConfigurationBoundPhaseSequencer.create(
            store,
            scheduler=scheduler,
            tick_seconds=app_config.timer.tick_seconds,
            logger=logging.getLogger("pomodoro"),
        )
    except SettingsError as error:
        logger.error("Settings error: %s", error)
        return 1

    watcher = SettingsFileWatcher(
        store,
        scheduler=scheduler,
        interval_seconds=app_config.timer.watch_interval_seconds,
        logger=logging.getLogger("settings.watcher"),
    )
    dispatcher = CommandDispatcher(
        timer=timer,
        settings_updater=store,
        logger=logging.getLogger("runtime.commands"),
    )

    # Optional event server for websocket updates and remote control
    event_server: Optional[EventStreamServer] = None
    try:
        server_config = EventServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")
        server_config = None

    if server_config and server_config.enabled:
        event_server = EventStreamServer(
            server_config,
            command_handler=lambda message: dispatcher.handle(message).to_payload(),
            status_provider=dispatcher.status,
            logger=logging.getLogger("ui_server"),
        )
        try:
            await event_server.start()
        except OSError as error:
            logger.error("UI server startup failed: %s", error)
            logger.warning("Continuing without UI server.")
            event_server = None

    publisher = TimerEventPublisher(event_server)
    timer.observe(publisher)
    store.on(EVENT_SETTINGS_CHANGE, publisher.publish_settings)
    publisher.publish_settings(timer.settings)
    watcher.start()

    logger.info("Phase timer ready: %s", status_message(timer.snapshot()))
    try:
        await stop_event.wait()
        logger.info("Shutting down...")
    finally:
        watcher.stop()
        timer.close()
        if event_server:
            logger.info("Stopping UI server...")
            await event_server.stop()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Run the phase timer service."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else None

    logger = setup_logging()
    try:
        app_config = load_app_config(config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(log_level(app_config.logging))
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    else:
        logger.info("No config file found, using defaults")

    try:
        return asyncio.run(run(app_config, logger))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
