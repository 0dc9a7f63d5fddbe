"""
Color channel utilities

Channel math used by the Color model and the color interpolator.
"""

CHANNEL_MIN = 0
CHANNEL_MAX = 255


def clamp_channel(value: float) -> int:
    """
    Round and clamp a channel value into 0-255

    Args:
        value: Raw channel value (may be out of range after overshoot)

    Returns:
        Integer channel value 0-255

    Example:
        clamp_channel(300.4)  # 255
        clamp_channel(-12)    # 0
        clamp_channel(127.6)  # 128
    """
    return max(CHANNEL_MIN, min(CHANNEL_MAX, int(round(value))))

