import math

import numpy as np
import pytest

from pumasim.camera import rotation_matrix
from pumasim.events import Action, KeyEvent, Mods
from pumasim.robot import Robot
from pumasim.shapes import Box

KEY_R = 82
KEY_F = 70
KEY_K = 75
KEY_Z = 90
SHIFT = 0x0001
WRIST_LOCAL = np.array([-1.72, 0.27, -0.26, 1.0])


def make_robot():
    return Robot([Box() for _ in range(6)])


def wrist(robot):
    return (robot.arms[3].model @ WRIST_LOCAL)[:3]


def press(key, mods=0):
    return KeyEvent(key, 0, Action.PRESS, Mods(mods))


def test_requires_six_arms():
    with pytest.raises(ValueError):
        Robot([Box() for _ in range(5)])


def test_arms_are_initialized():
    robot = make_robot()
    assert all(arm.initialized for arm in robot.arms)


def test_key_r_turns_base():
    robot = make_robot()
    assert robot.handle_key(press(KEY_R)) is True
    assert robot.angles[0] == pytest.approx(Robot.ANGLE_STEP)
    expected = rotation_matrix(Robot.ANGLE_STEP, (0.0, 1.0, 0.0))
    assert np.allclose(robot.arms[1].model, expected)


def test_key_f_turns_base_back():
    robot = make_robot()
    robot.handle_key(press(KEY_F))
    assert robot.angles[0] == pytest.approx(-Robot.ANGLE_STEP)


def test_shift_makes_larger_step():
    robot = make_robot()
    robot.handle_key(press(KEY_R, SHIFT))
    assert robot.angles[0] == pytest.approx(10 * Robot.ANGLE_STEP)


def test_key_k_only_moves_last_joint():
    robot = make_robot()
    robot.handle_key(press(KEY_K))
    assert robot.angles[4] < 0
    assert robot.angles[:4] == (0.0, 0.0, 0.0, 0.0)


def test_unknown_key_is_ignored():
    robot = make_robot()
    assert robot.handle_key(press(KEY_Z)) is False
    assert robot.angles == (0.0,) * 5
    assert all(np.array_equal(arm.model, np.identity(4)) for arm in robot.arms)


def test_rest_pose_gives_zero_angles():
    robot = make_robot()
    robot.set_arm_position((-2.05, 0.27, -0.26), (1.0, 0.0, 0.0))
    assert robot.angles == pytest.approx((0.0,) * 5, abs=1e-6)


def test_wrist_reaches_target():
    robot = make_robot()
    normal = np.array([math.cos(math.radians(30)), math.sin(math.radians(30)), 0.0])
    pos = np.array([-1.625, 0.2165, 0.0])
    robot.set_arm_position(pos, normal)
    assert np.allclose(wrist(robot), pos + 0.33 * normal, atol=1e-6)


def test_base_model_keeps_vertical_axis():
    robot = make_robot()
    robot.set_arm_position((-1.6, 0.3, 0.2), (1.0, 0.2, 0.0))
    up = robot.arms[1].model @ np.array([0.0, 1.0, 0.0, 0.0])
    assert np.allclose(up[:3], [0.0, 1.0, 0.0])


def test_point_above_base_is_out_of_reach():
    robot = make_robot()
    with pytest.raises(ValueError):
        robot.set_arm_position((0.0, 5.0, 0.0), (0.0, 1.0, 0.0))
    assert robot.angles == (0.0,) * 5


def test_zero_normal_rejected():
    robot = make_robot()
    with pytest.raises(ValueError):
        robot.set_arm_position((-1.6, 0.2, 0.0), (0.0, 0.0, 0.0))


def test_update_without_animation_does_nothing():
    robot = make_robot()
    robot.update(0.5)
    assert robot.time == 0.0
    assert robot.angles == (0.0,) * 5


def test_animation_traces_circle_on_sheet():
    robot = make_robot()
    center = np.array([-1.5, 0.0, 0.0])
    slope = math.radians(30)
    robot.start_animation(center, 0.25, slope)
    assert robot.animation is True
    robot.update(0.5)
    assert robot.time == pytest.approx(0.5)
    normal = np.array([math.cos(slope), math.sin(slope), 0.0])
    offset = wrist(robot) - 0.33 * normal - center
    assert np.linalg.norm(offset) == pytest.approx(0.25, abs=1e-6)
    assert np.dot(offset, normal) == pytest.approx(0.0, abs=1e-6)


def test_stop_animation_freezes_angles():
    robot = make_robot()
    robot.start_animation((-1.5, 0.0, 0.0), 0.25, math.radians(30))
    robot.update(0.2)
    frozen = robot.angles
    robot.stop_animation()
    robot.update(0.3)
    assert robot.animation is False
    assert robot.angles == frozen


def test_set_light_reaches_every_arm():
    robot = make_robot()
    robot.set_light(True)
    assert all(arm.light_enabled for arm in robot.arms)
    robot.set_light(False)
    assert not any(arm.light_enabled for arm in robot.arms)