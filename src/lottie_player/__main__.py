"""
__main__.py — run the players from a YAML config
------------------------------------------------

Responsible for:
- loading assets and player definitions
- ticking them with the PlaybackEngine
- clean shutdown on Ctrl+C or after --seconds

Usage:
    python -m lottie_player config/players.yaml --fps 60 --seconds 5
"""

import argparse
import asyncio
import sys

from lottie_player.engine.playback_engine import PlaybackEngine
from lottie_player.managers.config_manager import ConfigManager
from lottie_player.models.enums import LogCategory, LogLevel
from lottie_player.models.errors import PlaybackError
from lottie_player.services.asset_registry import AssetRegistry
from lottie_player.utils.logger import configure_logger, get_logger

# Set UTF-8 encoding for output (tree symbols in log details)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lottie_player", description="Tick state-machine players from a YAML config")
    parser.add_argument("config", help="Main YAML config file")
    parser.add_argument("--fps", type=int, default=60, help="Target tick rate (1-240)")
    parser.add_argument("--seconds", type=float, default=None, help="Stop after this many seconds")
    parser.add_argument("--debug", action="store_true", help="Verbose playback logs")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logger(LogLevel.DEBUG if args.debug else LogLevel.INFO, use_colors=not args.no_color)

    # ============================================================
    # 1. CONFIG + ASSETS
    # ============================================================

    config = ConfigManager(args.config)
    try:
        config.load()
        registry = AssetRegistry()
        config.register_assets(registry)
        players = config.build_players(registry)
    except (PlaybackError, OSError) as e:
        log.error("Invalid configuration", error=str(e))
        return 1

    # ============================================================
    # 2. ENGINE
    # ============================================================

    engine = PlaybackEngine(registry, fps=args.fps)
    for name, player in players.items():
        engine.add_player(name, player)

    await engine.start()
    log.info("Players running. Press Ctrl+C to exit...", players=len(players))

    try:
        if args.seconds is not None:
            await asyncio.sleep(args.seconds)
        else:
            await asyncio.Event().wait()
    finally:
        await engine.stop()
        log.info("Final state", metrics=engine.get_metrics())
        for snapshot in engine.snapshot():
            log.info(f"Player '{snapshot['name']}'", state=snapshot["state"], frame=f"{snapshot['frame']:.3f}")

    return 0


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
