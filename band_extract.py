# band_extract.py
from collections import namedtuple

import numpy as np

MAX_MAGNITUDE = 255.0

# [start, end) bin ranges over the byte spectrum
LOW_BAND  = (1, 8)
MID_BAND  = (8, 46)
HIGH_BAND = (46, 232)   # reaches past a 128-bin frame; clamped to the frame end

BandEnergies = namedtuple("BandEnergies", "low mid high")


def average(frame, start, end):
    """
    Mean of frame[start:end), with end clamped to len(frame).
    A range that lies wholly past the frame averages to 0.0.
    """
    start, end = int(start), int(end)
    if start < 0 or end <= start:
        raise ValueError(f"bad band range [{start}, {end})")
    values = np.asarray(frame).reshape(-1)
    end = min(end, len(values))
    if end <= start:
        return 0.0
    return float(values[start:end].sum(dtype=np.float64)) / (end - start)


def extract_bands(frame):
    """Byte spectrum -> BandEnergies, each in [0..1]."""
    return BandEnergies(
        low=average(frame, *LOW_BAND) / MAX_MAGNITUDE,
        mid=average(frame, *MID_BAND) / MAX_MAGNITUDE,
        high=average(frame, *HIGH_BAND) / MAX_MAGNITUDE,
    )
