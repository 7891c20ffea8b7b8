"""Column highlight and board gradient colours."""

import logging
import random
import re
from typing import Iterable

logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT = "#1976D2"
COLOR_ATTEMPTS = 20

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

# Used once random sampling keeps colliding with colours already on the board.
FALLBACK_COLORS: list[str] = [
    "#CC0000",  # red
    "#2E8B57",  # sea green
    "#AA2244",  # crimson
    "#DD6600",  # orange
    "#CCAA00",  # dark yellow
    "#7B68EE",  # medium slate blue
    "#2266CC",  # blue
    "#CC6699",  # pink
    "#886644",  # brown
    "#808080",  # grey
    "#668800",  # olive green
    "#DD4488",  # hot pink
    "#996633",  # sienna
    "#4499CC",  # sky blue
    "#5577CC",  # cornflower
    "#BB5500",  # burnt orange
    "#880022",  # dark red
    "#AA66CC",  # medium purple
    "#448888",  # dark cyan
    "#CC4444",  # indian red
    "#22AA44",  # green
    "#6688AA",  # steel blue
    "#44CC44",  # bright green
    "#008888",  # teal
    "#EE2222",  # bright red
    "#887766",  # taupe
    "#CC8800",  # amber
]


def is_hex_color(value: str) -> bool:
    """True for "#RRGGBB" strings."""
    return isinstance(value, str) and value.startswith("#") and _HEX_RE.match(value) is not None


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    """Parse "#RRGGBB" (hash optional) into an (r, g, b) tuple, or None."""
    match = _HEX_RE.match(value)
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


def random_color(rng: random.Random | None = None) -> str:
    """Uniformly random "#RRGGBB" colour."""
    rng = rng or random
    return "#" + "".join(rng.choice("0123456789ABCDEF") for _ in range(6))


def pick_distinct_color(
    existing: Iterable[str],
    rng: random.Random | None = None,
    attempts: int = COLOR_ATTEMPTS,
) -> str:
    """Random colour not already in existing.

    Gives up on sampling after ``attempts`` collisions and walks
    FALLBACK_COLORS instead. If every fallback is taken too, the
    fallback is chosen by cycling on the number of existing colours.
    """
    taken = {c.upper() for c in existing if c}
    for _ in range(max(attempts, 0)):
        color = random_color(rng)
        if color not in taken:
            return color
    logger.debug("colour sampling collided %d times, using fallback palette", attempts)
    for color in FALLBACK_COLORS:
        if color not in taken:
            return color
    return FALLBACK_COLORS[len(taken) % len(FALLBACK_COLORS)]


def random_gradient(rng: random.Random | None = None) -> tuple[str, str]:
    """Two random colours for a board card background."""
    return random_color(rng), random_color(rng)


def gradient_from_base(base: str) -> tuple[str, str]:
    """Gradient from base to a shade 20% lighter."""
    rgb = hex_to_rgb(base)
    if rgb is None:
        raise ValueError(f"Not a hex colour: {base!r}")

    def lighten(channel: int) -> int:
        return round(min(255, channel + (255 - channel) * 0.2))

    return base, rgb_to_hex(*(lighten(c) for c in rgb)).lower()
