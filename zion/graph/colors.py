"""Lane color keys to concrete colors."""

import colorsys

# Colors for the first color keys handed out in a layout pass
LANE_PALETTE = [
    "#2196F3",  # Blue
    "#E91E63",  # Pink
    "#4CAF50",  # Green
    "#FF9800",  # Orange
    "#009688",  # Teal
    "#9C27B0",  # Purple
    "#F44336",  # Red
    "#26C6A6",  # Mint
    "#3F51B5",  # Indigo
    "#FFC107",  # Yellow
    "#00BCD4",  # Cyan
    "#795548",  # Brown
]

# Golden-angle-ish step so neighbouring keys land far apart on the wheel
HUE_STEP = 137
FALLBACK_SATURATION = 0.80
FALLBACK_VALUE = 0.95


def hue_for_key(key: int) -> int:
    """Hue in degrees used once the palette runs out."""
    return (key * HUE_STEP) % 360


def color_for_key(key: int) -> str:
    """Get a "#rrggbb" color for a lane color key."""
    if 0 <= key < len(LANE_PALETTE):
        return LANE_PALETTE[key]

    red, green, blue = colorsys.hsv_to_rgb(
        hue_for_key(key) / 360.0, FALLBACK_SATURATION, FALLBACK_VALUE
    )
    return f"#{round(red * 255):02X}{round(green * 255):02X}{round(blue * 255):02X}"
