"""Swatch ranking: pick the colors returned to the client"""
from typing import Callable, Dict, List, Optional
from hexit.core.config import get_settings
from hexit.core.errors import ExtractionEmptyError
from hexit.models.schemas import Palette, Swatch, SwatchName

MAX_COLORS = 2

# Swatches that usually give the best looking results come first
PRIORITY_ORDER = [
    SwatchName.VIBRANT,
    SwatchName.MUTED,
    SwatchName.DARK_VIBRANT,
    SwatchName.LIGHT_VIBRANT,
    SwatchName.DARK_MUTED,
    SwatchName.LIGHT_MUTED,
]


def _is_valid(swatch: Optional[Swatch]) -> bool:
    return swatch is not None and bool(swatch.hex)


def present_swatches(palette: Palette) -> List[Swatch]:
    """Valid swatches in enumeration order"""
    return [
        palette[name] for name in SwatchName
        if _is_valid(palette.get(name))
    ]


def by_population(palette: Palette) -> List[Swatch]:
    """Valid swatches, most populous first (ties keep enumeration order)"""
    return sorted(present_swatches(palette), key=lambda s: s.population, reverse=True)


def _append_unseen(colors: List[str], swatches: List[Swatch]) -> None:
    for swatch in swatches:
        if len(colors) >= MAX_COLORS:
            return
        if swatch.hex not in colors:
            colors.append(swatch.hex)


def rank_by_priority(palette: Palette) -> List[str]:
    """
    Walk the fixed priority order, then fall back to the most populous swatches

    Args:
        palette: Named swatches, any of which may be missing

    Returns:
        Up to two distinct hex colors

    Raises:
        ExtractionEmptyError: If no swatch is usable
    """
    colors: List[str] = []
    prioritized = [palette.get(name) for name in PRIORITY_ORDER]
    _append_unseen(colors, [s for s in prioritized if _is_valid(s)])

    if len(colors) < MAX_COLORS:
        _append_unseen(colors, by_population(palette))

    if not colors:
        raise ExtractionEmptyError()
    return colors


def rank_by_dominance(palette: Palette, ratio: Optional[float] = None) -> List[str]:
    """
    Rank by population, collapsing to one color when a swatch dominates

    Args:
        palette: Named swatches, any of which may be missing
        ratio: Share of the total population above which only the top color
            is returned (defaults to settings.dominance_ratio)

    Returns:
        One or two distinct hex colors

    Raises:
        ExtractionEmptyError: If no swatch is usable
    """
    if ratio is None:
        ratio = get_settings().dominance_ratio

    swatches = by_population(palette)
    if not swatches:
        raise ExtractionEmptyError()

    total = sum(s.population for s in swatches)
    top = swatches[0]
    if total > 0 and top.population > ratio * total:
        return [top.hex]

    colors: List[str] = []
    _append_unseen(colors, swatches)
    return colors


POLICIES: Dict[str, Callable[[Palette], List[str]]] = {
    "priority": rank_by_priority,
    "dominance": rank_by_dominance,
}


def rank_swatches(palette: Palette, policy: Optional[str] = None) -> List[str]:
    """Rank a palette with the named policy (defaults to settings.ranking_policy)"""
    policy = policy or get_settings().ranking_policy
    try:
        rank = POLICIES[policy]
    except KeyError:
        raise ValueError(f"Unknown ranking policy: {policy}")
    return rank(palette)
