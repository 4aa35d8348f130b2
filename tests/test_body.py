import math

import pytest

from astrokit.body import (
    CollisionData,
    ColliderBox,
    PositionEvent,
    RotationEvent,
)
from astrokit.vecmath import Quaternion, Vec3

GRAVITY = Vec3(0.0, -9.81, 0.0)
QY90 = Quaternion(0.0, math.sin(math.pi / 4), 0.0, math.cos(math.pi / 4))


def test_initial_axes():
    box = ColliderBox(1.0)
    assert box.forward == Vec3(0.0, 0.0, -1.0)
    assert box.right == Vec3(1.0, 0.0, 0.0)
    assert box.up == Vec3(0.0, 1.0, 0.0)


def test_cube_inertia_is_uniform():
    box = ColliderBox(6.0, Vec3(2.0, 2.0, 2.0))
    assert box.inertia.x == pytest.approx(box.inertia.y)
    assert box.inertia.y == pytest.approx(box.inertia.z)


def test_box_area_matches_faces():
    box = ColliderBox(1.0, Vec3(2.0, 3.0, 5.0))
    assert box.area == Vec3(15.0, 10.0, 6.0)


def test_gravity_pulls_body_down():
    box = ColliderBox(1.0)
    box.update(0.1, GRAVITY)
    assert box.velocity.y < 0
    box.update(0.1, GRAVITY)
    assert box.position.y < 0
    assert box.position.x == 0.0


def test_no_gravity_body_stays_put():
    box = ColliderBox(1.0, position=Vec3(1.0, 2.0, 3.0))
    box.has_gravity = False
    box.update(0.1, GRAVITY)
    box.update(0.1, GRAVITY)
    assert box.position == Vec3(1.0, 2.0, 3.0)


def test_unsimulated_body_clears_forces():
    box = ColliderBox(1.0)
    box.simulated = False
    box.add_force(Vec3(1.0, 0.0, 0.0), 5.0)
    box.update(0.1, GRAVITY)
    assert box.force == Vec3()
    assert box.position == Vec3()


def test_force_accelerates_along_direction():
    box = ColliderBox(2.0)
    box.has_gravity = False
    box.add_force(Vec3(1.0, 0.0, 0.0), 10.0)
    box.update(0.1, Vec3())
    assert box.velocity.x > 0
    assert box.velocity.y == 0.0


def test_drag_opposes_velocity():
    box = ColliderBox(1.0)
    box.has_gravity = False
    box.velocity = Vec3(1.0, 0.0, 0.0)
    box.update(0.1, Vec3())
    assert box.force.x < 0


def test_add_torque_respects_can_rotate():
    box = ColliderBox(1.0)
    box.can_rotate = False
    box.add_torque(Vec3(1.0, 0.0, 0.0), 1.0)
    assert box.torque == Vec3()


def test_add_force_at_center_has_no_torque():
    box = ColliderBox(1.0)
    box.add_force_at(Vec3(), Vec3(0.0, 1.0, 0.0), 10.0)
    assert box.torque == Vec3()
    assert box.force.y > 0


def test_add_force_at_offset_adds_perpendicular_torque():
    box = ColliderBox(1.0)
    direction = Vec3(0.0, 1.0, 0.0)
    box.add_force_at(Vec3(1.0, 0.0, 0.0), direction, 10.0)
    assert box.torque.magnitude() > 0
    assert box.torque.dot(direction) == pytest.approx(0.0)


def test_impulse_changes_velocity_by_momentum():
    box = ColliderBox(2.0)
    box.add_impulse_at(box.position, Vec3(4.0, 0.0, -2.0))
    assert tuple(box.velocity) == pytest.approx((2.0, 0.0, -1.0), abs=1e-9)


def test_position_setter_and_move_fire_events():
    box = ColliderBox(1.0)
    seen = []
    box.on_position.add_listener(PositionEvent.CHANGE, seen.append)
    box.position = Vec3(1.0, 0.0, 0.0)
    box.move(Vec3(0.0, 2.0, 0.0))
    assert seen == [Vec3(1.0, 0.0, 0.0), Vec3(1.0, 2.0, 0.0)]


def test_rotation_updates_axes_and_fires():
    box = ColliderBox(1.0)
    seen = []
    box.on_rotation.add_listener(RotationEvent.CHANGE, seen.append)
    box.rotation = Quaternion(0.0, 2.0, 0.0, 2.0)
    assert tuple(box.rotation) == pytest.approx(tuple(QY90), abs=1e-9)
    assert seen == [box.rotation]
    expected_forward = QY90.rotate(Vec3(0.0, 0.0, -1.0))
    assert tuple(box.forward) == pytest.approx(tuple(expected_forward), abs=1e-9)
    assert box.right.dot(box.up) == pytest.approx(0.0, abs=1e-12)


def test_rotate_from_identity_gives_offset():
    box = ColliderBox(1.0)
    box.rotate(QY90)
    assert tuple(box.rotation) == pytest.approx(tuple(QY90), abs=1e-9)


def test_angular_velocity_rotates_body():
    box = ColliderBox(1.0)
    box.has_gravity = False
    box.angular_velocity = Vec3(1.0, 0.0, 0.0)
    box.update(0.1, Vec3())
    assert sum(c * c for c in box.rotation) == pytest.approx(1.0)
    assert tuple(box.right) == pytest.approx((1.0, 0.0, 0.0), abs=1e-9)
    assert box.up.z != pytest.approx(0.0)


def test_mult_velocity():
    box = ColliderBox(1.0)
    box.velocity = Vec3(2.0, 3.0, 4.0)
    box.mult_velocity(Vec3(1.0, 0.0, 1.0))
    assert box.velocity == Vec3(2.0, 0.0, 4.0)


def test_bounce_ignored_when_not_simulated():
    box = ColliderBox(1.0)
    box.simulated = False
    box.velocity = Vec3(0.0, -3.0, 0.0)
    box.bounce(Vec3(), Vec3(0.0, 1.0, 0.0), ColliderBox(1.0))
    assert box.velocity == Vec3(0.0, -3.0, 0.0)


def test_bounce_removes_normal_velocity_and_pushes_out():
    box = ColliderBox(1.0)
    box.velocity = Vec3(1.0, -3.0, 0.0)
    box.bounce(box.position, Vec3(0.0, 1.0, 0.0), ColliderBox(1.0))
    assert box.velocity == Vec3(1.0, 0.0, 0.0)
    assert box.force.y > 0


def test_child_follows_parent_position():
    parent = ColliderBox(1.0)
    child = ColliderBox(1.0)
    child.local_position = Vec3(1.0, 0.0, 0.0)
    child.set_parent(parent)
    parent.position = Vec3(5.0, 1.0, 0.0)
    assert tuple(child.position) == pytest.approx((6.0, 1.0, 0.0), abs=1e-9)
    assert child.parent is parent


def test_child_follows_parent_rotation():
    parent = ColliderBox(1.0)
    child = ColliderBox(1.0)
    child.set_parent(parent)
    parent.rotation = QY90
    assert tuple(child.rotation) == pytest.approx(tuple(QY90), abs=1e-9)


def test_detached_child_stops_following():
    parent = ColliderBox(1.0)
    child = ColliderBox(1.0)
    child.set_parent(parent)
    child.set_parent(None)
    parent.position = Vec3(5.0, 0.0, 0.0)
    assert child.position == Vec3()
    assert child.parent is None


def test_overlapping_boxes_collide():
    a = ColliderBox(1.0, position=Vec3(0.5, 0.0, 0.0))
    b = ColliderBox(1.0)
    data = a.check_collision(b)
    assert isinstance(data, CollisionData)
    assert data.other is b
    assert data.is_overlapping
    assert data.mtv > 0
    assert data.normal.magnitude() == pytest.approx(1.0)
    assert data.normal.dot(a.position - b.position) > 0


def test_distant_boxes_do_not_collide():
    a = ColliderBox(1.0, position=Vec3(10.0, 0.0, 0.0))
    b = ColliderBox(1.0)
    assert a.check_collision(b) is None
    assert b.check_collision(a) is None


def test_non_colliding_box_is_ignored():
    a = ColliderBox(1.0, position=Vec3(0.5, 0.0, 0.0))
    b = ColliderBox(1.0)
    b.can_collide = False
    assert a.check_collision(b) is None
    assert b.check_collision(a) is None