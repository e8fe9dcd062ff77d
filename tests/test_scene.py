import math

import numpy as np
import pytest

from pumasim.clock import FPSClock
from pumasim.events import Action, Button, KeyEvent, MouseClickEvent, ResizeEvent
from pumasim.mesh import Mesh, VerticesData, VertexPosNormal
from pumasim.robot import Robot
from pumasim.scene import SCR_HEIGHT, SCR_WIDTH, Renderer, Scene

KEY_C = 67
KEY_R = 82


class _TriangleArm(Mesh):
    def vertices_data(self):
        vertices = [
            VertexPosNormal((0, 0, 0), (0, 0, 1)),
            VertexPosNormal((1, 0, 0), (0, 0, 1)),
            VertexPosNormal((0, 1, 0), (0, 0, 1)),
        ]
        return VerticesData(3, 1, vertices, [(0, 1, 2)])


def _robot():
    return Robot([_TriangleArm() for _ in range(6)])


@pytest.fixture
def scene():
    return Scene(SCR_WIDTH, SCR_HEIGHT, _robot())


def _press(key, action=Action.PRESS, mods=0):
    return KeyEvent(key, 0, action, mods)


def test_initial_camera(scene):
    np.testing.assert_allclose(scene.camera.translation, [0.0, 1.0, 1.0])
    assert scene.camera.aspect == pytest.approx(SCR_WIDTH / SCR_HEIGHT)
    assert scene.animation_on is False


def test_static_meshes_initialized(scene):
    assert scene.room_box.initialized
    assert scene.metal_sheet.initialized
    assert scene.cylinder.initialized


def test_zero_height_rejected():
    with pytest.raises(ValueError):
        Scene(800, 0, _robot())


def test_set_framebuffer_size(scene):
    scene.set_framebuffer_size(1024, 512)
    assert scene.camera.aspect == pytest.approx(1024 / 512)
    with pytest.raises(ValueError):
        scene.set_framebuffer_size(10, 0)


def test_c_key_toggles_animation(scene):
    scene.handle_event(_press(KEY_C))
    assert scene.animation_on is True
    assert scene.robot.animation is True
    scene.handle_event(_press(KEY_C, Action.RELEASE))
    assert scene.animation_on is True
    scene.handle_event(_press(KEY_C))
    assert scene.animation_on is False
    assert scene.robot.animation is False


def test_repeat_key_turns_joint(scene):
    scene.handle_event(_press(KEY_R, Action.REPEAT))
    assert scene.robot.angles[0] == pytest.approx(Robot.ANGLE_STEP)
    scene.handle_event(_press(KEY_R, Action.RELEASE))
    assert scene.robot.angles[0] == pytest.approx(Robot.ANGLE_STEP)


def test_mouse_drag_marks_scene_moving(scene):
    scene.handle_event(MouseClickEvent(Button.LEFT, Action.PRESS))
    assert scene.is_scene_moving() is True
    scene.handle_event(MouseClickEvent(Button.LEFT, Action.RELEASE))
    assert scene.is_scene_moving() is False


def test_resize_event_is_ignored_by_handlers(scene):
    scene.handle_event(ResizeEvent(100, 100))
    assert scene.is_scene_moving() is False
    assert scene.animation_on is False


def test_update_without_animation_does_nothing(scene):
    scene.update(0.5)
    assert scene.time == 0.0
    assert scene.particles.particles == ()
    assert scene.robot.angles == (0.0,) * 5


def test_update_with_animation_traces_circle(scene):
    scene.handle_event(_press(KEY_C))
    scene.update(0.1)
    assert scene.time == pytest.approx(0.1)
    particles = scene.particles.particles
    assert len(particles) > 0
    center = np.array(scene.metal_sheet.center_position)
    slope = scene.metal_sheet.slope_angle
    normal = np.array([math.cos(slope), math.sin(slope), 0.0])
    for particle in particles:
        offset = particle.position - center
        assert np.linalg.norm(offset) == pytest.approx(Scene.CIRCLE_RADIUS)
        assert float(np.dot(offset, normal)) == pytest.approx(0.0, abs=1e-12)
    assert any(angle != 0.0 for angle in scene.robot.angles)


def test_update_accumulates_time(scene):
    scene.handle_event(_press(KEY_C))
    scene.update(0.2)
    scene.update(0.3)
    assert scene.time == pytest.approx(0.5)


class _Ticks:
    def __init__(self, values):
        self._values = iter(values)

    def __call__(self):
        return next(self._values)


def test_renderer_update_uses_clock(scene):
    clock = FPSClock(timer=_Ticks([0, 250]), frequency=1000)
    renderer = Renderer(scene, clock)
    scene.handle_event(_press(KEY_C))
    dt = renderer.update()
    assert dt == pytest.approx(0.25)
    assert scene.time == pytest.approx(0.25)


def test_renderer_resize(scene):
    renderer = Renderer(scene, FPSClock(timer=_Ticks([0])))
    assert (renderer.framebuffer_width, renderer.framebuffer_height) == (800, 600)
    renderer.resize(1200, 400)
    assert (renderer.framebuffer_width, renderer.framebuffer_height) == (1200, 400)
    assert scene.camera.aspect == pytest.approx(1200 / 400)
    with pytest.raises(ValueError):
        renderer.resize(1200, 0)