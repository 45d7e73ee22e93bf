import pytest

from lottie_player.models.enums import LogLevel
from lottie_player.models.signals import PointerSignal, TickContext
from lottie_player.models.timing import AnimationTimingDescriptor
from lottie_player.services.asset_registry import AssetRegistry
from lottie_player.utils.logger import configure_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Only warnings and errors on stdout while testing"""
    configure_logger(min_level=LogLevel.WARN, use_colors=False)
    yield
    configure_logger(min_level=LogLevel.INFO, use_colors=True)


@pytest.fixture
def timing():
    """10 fps composition with frames [0, 10)"""
    return AnimationTimingDescriptor.from_frames(10, 0, 10)


@pytest.fixture
def registry(timing):
    """Registry with 'button' (10 fps, [0, 10)) and 'spinner' (30 fps, [0, 60))"""
    reg = AssetRegistry()
    reg.register("button", timing)
    reg.register("spinner", AnimationTimingDescriptor.from_frames(30, 0, 60))
    return reg


class Clock:
    """Manual clock producing TickContexts"""

    def __init__(self):
        self.now = 0.0

    def tick(self, dt: float = 0.0, inside: bool = False, click: bool = False) -> TickContext:
        self.now += dt
        return TickContext(
            now=self.now,
            dt=dt,
            pointer=PointerSignal(is_inside=inside, primary_button_just_pressed=click),
        )


@pytest.fixture
def clock():
    return Clock()
