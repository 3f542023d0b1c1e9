import math

import numpy as np
import pygame as pg
import pytest

from solid_render import (DirectionalLight, PerspectiveCamera, SceneRenderer,
                          clip_segment, euler_xyz)
from solid_set import BLINKING, HUE_ROTATING, VisualObject, create_objects


def test_euler_identity_and_orthonormal():
    assert euler_xyz(0.0, 0.0) == pytest.approx(np.eye(3))
    R = euler_xyz(0.7, 1.9)
    assert R @ R.T == pytest.approx(np.eye(3))
    assert np.linalg.det(R) == pytest.approx(1.0)


def test_euler_applies_x_then_y():
    a = 0.4
    cx, sx, cy, sy = math.cos(a), math.sin(a), math.cos(a), math.sin(a)
    Rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    Ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    assert euler_xyz(a, a) == pytest.approx(Rx @ Ry)


def test_camera_defaults():
    cam = PerspectiveCamera()
    assert (cam.fov, cam.near, cam.far) == (75.0, 0.1, 1000.0)
    assert tuple(cam.position) == (0.0, 0.3, 12.0)


def test_origin_projects_to_center():
    cam = PerspectiveCamera(aspect=800 / 600)
    origin_cam = cam.to_camera([(0.0, 0.0, 0.0)])
    assert origin_cam[0] == pytest.approx(np.array([0.0, 0.0, -math.hypot(0.3, 12.0)]))
    assert cam.to_screen(origin_cam, 800, 600)[0] == pytest.approx(np.array([400.0, 300.0]))


def test_up_is_up_on_screen():
    cam = PerspectiveCamera(aspect=1.0)
    px = cam.to_screen(cam.to_camera([(0.0, 1.0, 0.0), (1.0, 0.0, 0.0)]), 600, 600)
    assert px[0][1] < 300.0
    assert px[1][0] > 300.0


def test_projection_matrix_maps_near_and_far():
    cam = PerspectiveCamera()
    P = cam.projection_matrix()
    for z, depth in ((-cam.near, -1.0), (-cam.far, 1.0)):
        clip = P @ np.array([0.0, 0.0, z, 1.0])
        assert clip[2] / clip[3] == pytest.approx(depth)


def test_light_direction_normalized():
    light = DirectionalLight()
    assert np.linalg.norm(light.direction) == pytest.approx(1.0)
    assert light.intensity == 1.0


def test_clip_segment():
    a, b = np.array([0.0, 0.0, 1.0]), np.array([0.0, 0.0, 2.0])
    assert clip_segment(a, b, 0.1, 1000.0) is None

    a, b = np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0, -5.0])
    ca, cb = clip_segment(a, b, 0.1, 1000.0)
    assert ca[2] == pytest.approx(-0.1)
    assert tuple(cb) == (0.0, 0.0, -5.0)

    a, b = np.array([1.0, 0.0, -2.0]), np.array([1.0, 0.0, -3.0])
    ca, cb = clip_segment(a, b, 0.1, 1000.0)
    assert tuple(ca) == tuple(a) and tuple(cb) == tuple(b)

    a, b = np.array([0.0, 0.0, -10.0]), np.array([0.0, 0.0, -2000.0])
    ca, cb = clip_segment(a, b, 0.1, 1000.0)
    assert cb[2] == pytest.approx(-1000.0)


def test_line_color_blends_opacity():
    obj = VisualObject(BLINKING, 1.0, 1.0)
    obj.color = (1.0, 1.0, 1.0)
    assert SceneRenderer.line_color(obj) == (204, 204, 204)
    obj.color = (0.0, 0.5, 1.0)
    assert SceneRenderer.line_color(obj) == (0, 102, 204)


def test_model_points_apply_scale_and_rotation():
    obj = VisualObject(HUE_ROTATING, 2.0, 2.0, 0.3)
    obj.update(0.0)
    pts = SceneRenderer.model_points(obj)
    assert np.linalg.norm(pts, axis=1) == pytest.approx(np.full(20, 2.0 * obj.scale))


def test_large_cube_around_camera_still_draws():
    renderer = SceneRenderer(800, 600)
    big = create_objects()[0]
    segs = renderer.edge_segments(big)
    assert 0 < len(segs) <= 12


def test_draw_puts_lines_on_black():
    renderer = SceneRenderer(320, 240)
    screen = pg.Surface((320, 240))
    screen.fill((9, 9, 9))
    objs = create_objects()
    for o in objs:
        o.update(0.0)
    renderer.draw(screen, objs)
    pixels = pg.surfarray.array3d(screen)
    assert pixels.any()
    # background cleared to black, lines cover only a small part
    assert (pixels == 0).all(axis=2).mean() > 0.5


def test_resize_tracks_viewport():
    renderer = SceneRenderer(800, 600)
    renderer.resize(1000, 500)
    assert (renderer.width, renderer.height) == (1000, 500)
    assert renderer.camera.aspect == 2.0
