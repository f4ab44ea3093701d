"""Rewrite pass registry for makecode-mpy.

Passes run in registration order, which is the import order below.
"""

from makecode_mpy.rewrite import RewritePass

_REGISTRY: dict[str, RewritePass] = {}


def register_rewrite(rewrite: RewritePass) -> None:
    """Register a rewrite pass by its name."""
    _REGISTRY[rewrite.name] = rewrite


def get_rewrite(name: str) -> RewritePass | None:
    """Get a rewrite pass by name."""
    return _REGISTRY.get(name)


def list_rewrites() -> list[RewritePass]:
    """Return all registered passes in application order."""
    return list(_REGISTRY.values())


# Auto-import pass modules so they self-register, in pipeline order.
from makecode_mpy.rewrites import display as _display  # noqa: F401, E402
from makecode_mpy.rewrites import inputs as _inputs  # noqa: F401, E402
from makecode_mpy.rewrites import pins as _pins  # noqa: F401, E402
from makecode_mpy.rewrites import music_radio as _music_radio  # noqa: F401, E402
from makecode_mpy.rewrites import analog_pitch as _analog_pitch  # noqa: F401, E402
