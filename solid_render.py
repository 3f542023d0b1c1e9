# solid_render.py
import math

import numpy as np
import pygame as pg

BLACK = (0, 0, 0)

FOV_DEG    = 75.0
NEAR, FAR  = 0.1, 1000.0
CAMERA_POS = (0.0, 0.3, 12.0)
LOOK_AT    = (0.0, 0.0, 0.0)


def euler_xyz(ax, ay, az=0.0):
    """Rotation for Euler angles applied in X, Y, Z order (R = Rx @ Ry @ Rz)."""
    cx, sx = math.cos(ax), math.sin(ax)
    cy, sy = math.cos(ay), math.sin(ay)
    cz, sz = math.cos(az), math.sin(az)
    Rx = np.array([[1,0,0],[0,cx,-sx],[0,sx,cx]], float)
    Ry = np.array([[cy,0,sy],[0,1,0],[-sy,0,cy]], float)
    Rz = np.array([[cz,-sz,0],[sz,cz,0],[0,0,1]], float)
    return Rx @ Ry @ Rz


class PerspectiveCamera:
    """Fixed pinhole camera; looks down its local -z axis."""
    def __init__(self, fov=FOV_DEG, aspect=4/3, near=NEAR, far=FAR,
                 position=CAMERA_POS, target=LOOK_AT):
        self.fov, self.aspect = float(fov), float(aspect)
        self.near, self.far = float(near), float(far)
        self.position = np.array(position, float)
        self.target = np.array(target, float)

    def view_matrix(self):
        """4x4 world -> camera transform."""
        fwd = self.target - self.position
        fwd /= np.linalg.norm(fwd)
        right = np.cross(fwd, (0.0, 1.0, 0.0))
        right /= np.linalg.norm(right)
        up = np.cross(right, fwd)
        V = np.eye(4)
        V[0, :3], V[1, :3], V[2, :3] = right, up, -fwd
        V[:3, 3] = -V[:3, :3] @ self.position
        return V

    def projection_matrix(self):
        """4x4 camera -> clip transform, OpenGL convention."""
        f = 1.0 / math.tan(math.radians(self.fov) / 2)
        n, fa = self.near, self.far
        P = np.zeros((4, 4))
        P[0, 0] = f / self.aspect
        P[1, 1] = f
        P[2, 2] = (fa + n) / (n - fa)
        P[2, 3] = 2 * fa * n / (n - fa)
        P[3, 2] = -1.0
        return P

    def to_camera(self, points):
        """(N,3) world points -> (N,3) camera-space points."""
        pts = np.asarray(points, float)
        V = self.view_matrix()
        return pts @ V[:3, :3].T + V[:3, 3]

    def to_screen(self, cam_points, width, height):
        """(N,3) camera-space points in front of the camera -> (N,2) pixels."""
        pts = np.asarray(cam_points, float).reshape(-1, 3)
        homo = np.hstack([pts, np.ones((len(pts), 1))]) @ self.projection_matrix().T
        ndc = homo[:, :2] / homo[:, 3:4]
        sx = (ndc[:, 0] + 1) * 0.5 * width
        sy = (1 - ndc[:, 1]) * 0.5 * height
        return np.stack([sx, sy], axis=1)


class DirectionalLight:
    def __init__(self, color=(1.0, 1.0, 1.0), intensity=1.0, direction=(1.0, 1.0, 1.0)):
        self.color = tuple(color)
        self.intensity = float(intensity)
        d = np.array(direction, float)
        self.direction = d / np.linalg.norm(d)


def clip_segment(a, b, near, far):
    """
    Clip a camera-space segment to -far <= z <= -near.
    Returns (a', b') or None when nothing is left.
    """
    za, zb = -a[2], -b[2]             # distance in front of the camera
    if (za < near and zb < near) or (za > far and zb > far):
        return None
    for plane in (near, far):
        da, db = za - plane, zb - plane
        if (da < 0) != (db < 0):
            t = da / (da - db)
            p = a + t * (b - a)
            keep_a = (da >= 0) if plane == near else (da <= 0)
            if keep_a:
                b, zb = p, plane
            else:
                a, za = p, plane
    return a, b


class SceneRenderer:
    """
    Draws VisualObjects as unlit wireframes from a fixed camera.
    The light is part of the scene but wireframe lines are not shaded by it.
    """
    def __init__(self, width=800, height=600):
        self.width, self.height = int(width), int(height)
        self.camera = PerspectiveCamera(aspect=self.width / self.height)
        self.light = DirectionalLight()

    def resize(self, width, height):
        self.width, self.height = max(1, int(width)), max(1, int(height))
        self.camera.aspect = self.width / self.height

    @staticmethod
    def model_points(obj):
        """Object vertices in world space: scale, then Euler XYZ rotation."""
        R = euler_xyz(obj.rotation[0], obj.rotation[1])
        return (obj.vertices * obj.scale) @ R.T

    @staticmethod
    def line_color(obj):
        # opacity blended over a black background
        return tuple(int(round(255 * max(0.0, min(1.0, c)) * obj.opacity)) for c in obj.color)

    def edge_segments(self, obj):
        """Screen-space ((x0,y0),(x1,y1)) for each visible part of obj's edges."""
        cam = self.camera.to_camera(self.model_points(obj))
        segs = []
        for i, j in obj.edges:
            clipped = clip_segment(cam[i], cam[j], self.camera.near, self.camera.far)
            if clipped is None:
                continue
            (x0, y0), (x1, y1) = self.camera.to_screen(np.array(clipped), self.width, self.height)
            segs.append(((int(x0), int(y0)), (int(x1), int(y1))))
        return segs

    def draw(self, screen, objects):
        screen.fill(BLACK)
        for obj in objects:
            color = self.line_color(obj)
            for a, b in self.edge_segments(obj):
                pg.draw.aaline(screen, color, a, b)
