"""
Asset Registry

Provides the read-only timing descriptor of each animation asset, keyed by
asset handle. An asset is "ready" once its descriptor is registered; until
then players skip ticks that need it and re-queue swaps that target it.
"""

from typing import Dict, Hashable, List, Optional

from lottie_player.models.enums import LogCategory
from lottie_player.models.timing import AnimationTimingDescriptor
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ASSET)


class AssetRegistry:
    """
    Asset handle → AnimationTimingDescriptor lookup

    Example:
        registry = AssetRegistry()
        registry.register("button.json", AnimationTimingDescriptor.from_frames(30, 0, 60))
        registry.is_ready("button.json")  # True
    """

    def __init__(self):
        self._timings: Dict[Hashable, AnimationTimingDescriptor] = {}

    def register(self, handle: Hashable, timing: AnimationTimingDescriptor) -> None:
        """Mark an asset as loaded with the given timing"""
        replaced = handle in self._timings
        self._timings[handle] = timing
        log.info(
            "Asset timing replaced" if replaced else "Asset ready",
            asset=handle,
            frame_rate=timing.frame_rate,
            frames=f"{timing.frame_range.start}..{timing.frame_range.end}",
        )

    def unregister(self, handle: Hashable) -> None:
        if self._timings.pop(handle, None) is not None:
            log.info("Asset unloaded", asset=handle)

    def get(self, handle: Optional[Hashable]) -> Optional[AnimationTimingDescriptor]:
        """Timing for the asset, None while it is not ready"""
        if handle is None:
            return None
        return self._timings.get(handle)

    def is_ready(self, handle: Optional[Hashable]) -> bool:
        return handle is not None and handle in self._timings

    def handles(self) -> List[Hashable]:
        return list(self._timings.keys())

    def __len__(self) -> int:
        return len(self._timings)

    def __repr__(self) -> str:
        return f"AssetRegistry({len(self._timings)} assets)"
