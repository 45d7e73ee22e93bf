"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files, registers asset timings and builds players.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union

from lottie_player.managers.player_manager import PlayerManager
from lottie_player.models.enums import LogCategory
from lottie_player.models.errors import PlaybackConfigError
from lottie_player.models.timing import AnimationTimingDescriptor
from lottie_player.services.asset_registry import AssetRegistry
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

PathLike = Union[str, Path]


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads the main YAML file and processes the include: directive to load
    modular YAML files. Registers asset timings with an AssetRegistry and
    builds validated players through PlayerManager.

    Example:
        config = ConfigManager("config/players.yaml")
        config.load()

        registry = AssetRegistry()
        config.register_assets(registry)
        players = config.build_players(registry)   # Dict[str, Player]

    YAML layout:
        include: [assets.yaml, players.yaml]     # optional
        assets:
          button: {frame_rate: 30, frames: [0, 60]}
        players:
          button:
            initial: idle
            asset: button
            states:
              idle:
                transitions:
                  - {type: mouse_enter, target: hover}
              hover:
                options: {looping: do_not_loop}
                reset_playhead_on_start: true
                transitions:
                  - {type: mouse_leave, target: idle}
    """

    def __init__(self, config_path: PathLike, defaults_path: Optional[PathLike] = None):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to the main YAML file
            defaults_path: Optional fallback file used when the main file fails to load
        """
        self.config_path = Path(config_path)
        self.defaults_path = Path(defaults_path) if defaults_path else None
        self.data: Dict = {}

    def load(self) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main file
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fall back to defaults on failure (re-raise when there are none)

        Returns:
            Merged config data dict
        """
        try:
            main_config = self._read_yaml(self.config_path)

            if 'include' in main_config:
                log.info("Using include-based configuration")
                includes = main_config.pop('include') or []
                self.data = self._load_with_includes(includes, self.config_path.parent)
                # Keys in the main file win over included ones
                self.data.update(main_config)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except Exception as ex:
            log.error(f"Failed to load {self.config_path}", error=str(ex), error_type=type(ex).__name__)
            if self.defaults_path is None:
                raise
            log.warn("Falling back to defaults", path=str(self.defaults_path))
            self.data = self._read_yaml(self.defaults_path)

        return self.data

    @staticmethod
    def _read_yaml(path: Path) -> Dict:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PlaybackConfigError(
                f"{path.name} must contain a mapping at the top level",
                details={"path": str(path)},
            )
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["assets.yaml", "players.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                file_data = self._read_yaml(filepath)
                if file_data:
                    for key, value in file_data.items():
                        # Sections from several files are merged, not replaced
                        if isinstance(value, dict) and isinstance(merged.get(key), dict):
                            merged[key].update(value)
                        else:
                            merged[key] = value
                    log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Assets =====

    def get_asset_timings(self) -> Dict[str, AnimationTimingDescriptor]:
        """
        Parse the assets section.

        Each entry needs frame_rate and frames: [start, end].

        Raises:
            PlaybackConfigError / InvalidPlaybackRateError on malformed entries
        """
        timings: Dict[str, AnimationTimingDescriptor] = {}
        for handle, entry in (self.data.get("assets") or {}).items():
            try:
                start, end = entry["frames"]
                timings[handle] = AnimationTimingDescriptor.from_frames(entry["frame_rate"], start, end)
            except (KeyError, TypeError, ValueError) as e:
                raise PlaybackConfigError(
                    f"Invalid asset entry '{handle}': {e}",
                    details={"asset": handle, "entry": entry},
                )
        return timings

    def register_assets(self, registry: AssetRegistry) -> int:
        """Register every configured asset timing, returns the count"""
        timings = self.get_asset_timings()
        for handle, timing in timings.items():
            registry.register(handle, timing)
        if not timings:
            log.warn("No assets defined in config!")
        return len(timings)

    # ===== Players =====

    def build_players(self, registry: Optional[AssetRegistry] = None) -> Dict:
        """Build validated players from the players section"""
        manager = PlayerManager(self.data)
        players = manager.build_all(registry)
        log.info(f"Built {len(players)} players from config", players=list(players.keys()))
        return players
