"""
Development entry point: runs the wheel in a pygame window.

    python -m spinwheel.main
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from spinwheel.config.settings import get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_window() -> None:
    """Build the wheel from settings and run the host window."""
    from spinwheel.audio.engine import AudioEngine
    from spinwheel.core.wheel import WheelApp
    from spinwheel.simulator.window import SimulatorWindow, WindowConfig
    from spinwheel.storage.store import JsonFileStore

    settings = get_settings()
    app = WheelApp.from_settings(settings)
    store = JsonFileStore(settings.storage.data_dir)
    audio = AudioEngine(volume=settings.audio.volume) if settings.audio.enabled else None

    window = SimulatorWindow(
        app=app,
        store=store,
        config=WindowConfig(
            size=settings.display.wheel_size,
            title=settings.display.window_title,
            fps=settings.display.fps,
            state_key=settings.storage.state_key,
            themes_path=settings.themes_path,
        ),
        audio=audio,
    )
    window.load()
    await window.run()


def main() -> None:
    """Main entry point."""
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("spinwheel starting...")

    try:
        asyncio.run(run_window())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("spinwheel stopped")


if __name__ == "__main__":
    main()
