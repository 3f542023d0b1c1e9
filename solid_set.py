# solid_set.py
import itertools
import math

import numpy as np

from solid_color import advance_phase, blink_color, hue_color

TIMESTEP = 1.0 / 60.0      # nominal frame step; wall time is never measured

SPIN_GAIN  = 30.0          # extra rad/s per unit amplitude
PULSE_GAIN = 0.12          # extra scale per unit amplitude
OPACITY    = 0.8

BLINKING     = "blinking"
HUE_ROTATING = "hue_rotating"

# (kind, size, speed, color speed) in draw order: low cube, mid cube, composite solid
SOLIDS = [
    (BLINKING,     5.0, 2.0, 0.0),
    (BLINKING,     3.5, 2.0, 0.0),
    (HUE_ROTATING, 2.0, 2.0, 0.3),
]

PHI = (1 + 5 ** 0.5) / 2


def box_geometry(size):
    """Cube with edge length `size` centered on the origin -> (vertices (8,3), edges)."""
    h = size / 2.0
    vertices = np.array([(-1,-1, 1),( 1,-1, 1),( 1, 1, 1),(-1, 1, 1),
                         (-1,-1,-1),( 1,-1,-1),( 1, 1,-1),(-1, 1,-1)], float) * h
    edges = [(0,1),(1,2),(2,3),(3,0),
             (4,5),(5,6),(6,7),(7,4),
             (0,4),(1,5),(2,6),(3,7)]
    return vertices, edges


def dodecahedron_geometry(radius):
    """Regular dodecahedron inscribed in a sphere of `radius` -> (vertices (20,3), edges)."""
    r = 1.0 / PHI
    pts = [(x, y, z) for x in (-1, 1) for y in (-1, 1) for z in (-1, 1)]
    for a in (-r, r):
        for b in (-PHI, PHI):
            pts += [(0, a, b), (a, b, 0), (b, 0, a)]
    vertices = np.array(pts, float)
    vertices *= radius / np.linalg.norm(vertices[0])

    # edges join nearest neighbours
    edge_len = 2.0 * r * radius / math.sqrt(3)
    edges = [(i, j) for i, j in itertools.combinations(range(len(vertices)), 2)
             if abs(np.linalg.norm(vertices[i] - vertices[j]) - edge_len) < 1e-6 * max(1.0, radius)]
    return vertices, edges


class VisualObject:
    """
    One animated wireframe solid. Shape is fixed at construction; only the
    values change frame to frame.
      .angle        accumulated spin (rad), never decreases
      .color_phase  hue in [0..1), advanced only for HUE_ROTATING
      .scale        uniform render scale
      .rotation     (x, y) Euler angles, both equal to .angle
      .color        (r, g, b) in [0..1]
    """
    __slots__ = ("kind", "base_size", "base_speed", "color_speed",
                 "vertices", "edges", "angle", "color_phase",
                 "scale", "rotation", "color", "opacity")

    def __init__(self, kind, base_size, base_speed, color_speed=0.0):
        if kind not in (BLINKING, HUE_ROTATING):
            raise ValueError(f"unknown solid kind: {kind!r}")
        self.kind = kind
        self.base_size = float(base_size)
        self.base_speed = float(base_speed)
        self.color_speed = float(color_speed)

        if kind == BLINKING:
            self.vertices, self.edges = box_geometry(self.base_size)
        else:
            self.vertices, self.edges = dodecahedron_geometry(self.base_size)

        self.angle = 0.0
        self.color_phase = 0.0
        self.scale = self.base_size
        self.rotation = (0.0, 0.0)
        self.color = (1.0, 1.0, 1.0)
        self.opacity = OPACITY

    def update(self, amp, dt=TIMESTEP):
        self.angle += (self.base_speed + SPIN_GAIN * amp) * dt
        self.scale = self.base_size * (1.0 + PULSE_GAIN * amp)

        if self.kind == HUE_ROTATING:
            self.color_phase = advance_phase(self.color_phase, self.color_speed, dt)
            self.color = hue_color(self.color_phase)
        else:
            self.color = blink_color(self.angle)

        self.rotation = (self.angle, self.angle)

    def __repr__(self):
        return (f"VisualObject({self.kind}, size={self.base_size}, "
                f"angle={self.angle:.3f}, scale={self.scale:.3f})")


def create_objects():
    return [VisualObject(kind, size, speed, cspeed) for kind, size, speed, cspeed in SOLIDS]


def amplitude_for(index, bands):
    """0 -> low, 1 -> mid, 2 -> mean of all three bands."""
    low, mid, high = bands
    if index == 0: return low
    if index == 1: return mid
    if index == 2: return (low + mid + high) / 3
    raise IndexError(f"no band mapping for object {index}")


def update_objects(objects, bands, dt=TIMESTEP):
    for i, obj in enumerate(objects):
        obj.update(amplitude_for(i, bands), dt)
