"""Color helpers: hex conversion and high-contrast faction colors."""

from __future__ import annotations

import random

from ..constants import MIN_CONTRAST_RATIO

RGB = tuple[int, int, int]


def hex_to_rgb(value: str) -> RGB:
    clean = value.lstrip("#")
    return int(clean[0:2], 16), int(clean[2:4], 16), int(clean[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    def channel(c: float) -> int:
        return int(round(max(0.0, min(255.0, c))))

    return f"#{channel(r):02x}{channel(g):02x}{channel(b):02x}"


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Hue in degrees, saturation and value in 0..1; channels in 0..255."""
    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c
    sextant = int(h // 60) % 6
    r, g, b = [
        (c, x, 0.0),
        (x, c, 0.0),
        (0.0, c, x),
        (0.0, x, c),
        (x, 0.0, c),
        (c, 0.0, x),
    ][sextant]
    return (r + m) * 255, (g + m) * 255, (b + m) * 255


def relative_luminance(r: float, g: float, b: float) -> float:
    """WCAG relative luminance of an sRGB color."""

    def linear(c: float) -> float:
        c /= 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linear(r) + 0.7152 * linear(g) + 0.0722 * linear(b)


def contrast_ratio(color_a: str, color_b: str) -> float:
    lum_a = relative_luminance(*hex_to_rgb(color_a))
    lum_b = relative_luminance(*hex_to_rgb(color_b))
    lighter, darker = max(lum_a, lum_b), min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def blend(color_a: RGB, color_b: RGB, t: float) -> RGB:
    """Linear mix, ``t=0`` gives ``color_a``."""
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(color_a, color_b))


# ---------------------------------------------------------------------------
# High-contrast generation
# ---------------------------------------------------------------------------


def valid_luminance_ranges(
    existing: list[float], min_ratio: float,
) -> list[tuple[float, float]]:
    """Luminance intervals whose contrast with every ``existing`` value is enough."""
    forbidden = sorted(
        (max(0.0, (lum + 0.05) / min_ratio - 0.05), min(1.0, (lum + 0.05) * min_ratio - 0.05))
        for lum in existing
    )

    merged: list[list[float]] = []
    for low, high in forbidden:
        if not merged or merged[-1][1] < low:
            merged.append([low, high])
        else:
            merged[-1][1] = max(merged[-1][1], high)

    ranges: list[tuple[float, float]] = []
    cursor = 0.0
    for low, high in merged:
        if cursor < low:
            ranges.append((cursor, low))
        cursor = max(cursor, high)
    if cursor < 1.0:
        ranges.append((cursor, 1.0))

    return [(low, high) for low, high in ranges if high - low > 0.001]


def _color_with_luminance(target: float, rng: random.Random) -> str:
    """Random hue and saturation, value bisected toward ``target`` luminance."""
    hue = rng.uniform(0, 360)
    saturation = 0.3 + rng.random() * 0.7
    low, high = 0.0, 1.0
    best_value, best_diff = 0.5, float("inf")
    for _ in range(20):
        value = (low + high) / 2
        lum = relative_luminance(*hsv_to_rgb(hue, saturation, value))
        diff = abs(lum - target)
        if diff < best_diff:
            best_value, best_diff = value, diff
        if lum < target:
            low = value
        else:
            high = value
    return rgb_to_hex(*hsv_to_rgb(hue, saturation, best_value))


def generate_high_contrast_color(
    colors: list[str],
    min_ratio: float = MIN_CONTRAST_RATIO,
    max_attempts: int = 50,
    rng: random.Random | None = None,
) -> str | None:
    """Random color with at least ``min_ratio`` contrast against all ``colors``.

    The required ratio is relaxed in small steps while no luminance range
    remains. Returns None if sampling fails ``max_attempts`` times.
    """
    rng = rng or random.Random()
    if not colors:
        return rgb_to_hex(*hsv_to_rgb(rng.uniform(0, 360), 0.7, 0.8))

    clean = [c if c.startswith("#") else f"#{c}" for c in colors]
    luminances = [relative_luminance(*hex_to_rgb(c)) for c in clean]

    ranges = valid_luminance_ranges(luminances, min_ratio)
    while not ranges and min_ratio > 1.0:
        min_ratio -= 0.01
        ranges = valid_luminance_ranges(luminances, min_ratio)
    if not ranges:
        return None

    total = sum(high - low for low, high in ranges)
    for _ in range(max_attempts):
        pick = rng.random() * total
        low, high = ranges[0]
        for low, high in ranges:
            if pick <= high - low:
                break
            pick -= high - low
        candidate = _color_with_luminance(low + rng.random() * (high - low), rng)
        if all(contrast_ratio(candidate, c) >= min_ratio for c in clean):
            return candidate
    return None


def generate_high_contrast_colors(
    n: int,
    existing: list[str],
    min_ratio: float = MIN_CONTRAST_RATIO,
    rng: random.Random | None = None,
) -> list[str]:
    """``existing`` followed by up to ``n`` new mutually contrasting colors."""
    rng = rng or random.Random()
    colors = list(existing)
    for _ in range(n):
        color = generate_high_contrast_color(colors, min_ratio, rng=rng)
        if color:
            colors.append(color)
    return colors


def assign_faction_colors(
    factions: list[str],
    reserved: list[str],
    min_ratio: float = 1.5,
    seed: int = 0,
) -> dict[str, str]:
    """Map each faction name to a color contrasting with ``reserved`` and each other.

    Seeded so the same factions get the same colors on every load.
    """
    names = list(dict.fromkeys(factions))
    rng = random.Random(seed)
    colors = generate_high_contrast_colors(len(names), reserved, min_ratio, rng=rng)
    fresh = colors[len(reserved):]
    return {name: fresh[i] for i, name in enumerate(names) if i < len(fresh)}
