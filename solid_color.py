# solid_color.py
import math

BLINK_RATE = 0.2
HUE_SATURATION = 0.9
HUE_VALUE = 1.0


def hsv_to_rgb(h, s, v):
    """
    h, s, v in [0..1] -> (r, g, b) in [0..1].
    Six-sector table; sector = floor(h*6) mod 6.
    """
    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = i % 6
    if sector == 0: return (v, t, p)
    if sector == 1: return (q, v, p)
    if sector == 2: return (p, v, t)
    if sector == 3: return (p, q, v)
    if sector == 4: return (t, p, v)
    return (v, p, q)


def blink_color(angle):
    """Grayscale that breathes with the accumulated spin angle."""
    b = (math.sin(angle * BLINK_RATE) + 1) / 2
    return (b, b, b)


def advance_phase(phase, speed, dt):
    return (phase + dt * speed) % 1.0


def hue_color(phase):
    return hsv_to_rgb(phase, HUE_SATURATION, HUE_VALUE)
