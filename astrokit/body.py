"""Rigid collider bodies with simple integration and box-box collision."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from .events import Event, ListenerHandle
from .vecmath import Quaternion, Vec3

AIR_DENSITY = 1.1455


class PositionEvent(Enum):
    CHANGE = auto()


class RotationEvent(Enum):
    CHANGE = auto()


class CollisionEvent(Enum):
    OVERLAP = auto()
    TOUCH = auto()


@dataclass
class CollisionData:
    """Contact description: separation, contact normal and point, other body."""

    mtv: float = math.inf
    normal: Vec3 = field(default_factory=Vec3)
    position: Vec3 = field(default_factory=Vec3)
    is_overlapping: bool = False
    other: Optional["ColliderBody"] = None


def _abs(v: Vec3) -> Vec3:
    return Vec3(abs(v.x), abs(v.y), abs(v.z))


class ColliderBody(ABC):
    """A simulated body with linear and angular motion."""

    def __init__(self, mass: float, inertia: Vec3) -> None:
        self.mass = float(mass)
        self.inertia = inertia

        self.has_gravity = True
        self.can_collide = True
        self.simulated = True
        self.can_rotate = True

        self.drag_coefficient = 10.0
        self.bounciness = 1.0

        self.velocity = Vec3()
        self.angular_velocity = Vec3()
        self.force = Vec3()
        self.acceleration = Vec3()
        self.torque = Vec3()
        self.area = Vec3()

        self.local_position = Vec3()
        self.local_rotation = Quaternion()

        self._position = Vec3()
        self._rotation = Quaternion()
        self._forward = Vec3(0.0, 0.0, -1.0)
        self._right = Vec3(1.0, 0.0, 0.0)
        self._up = Vec3(0.0, 1.0, 0.0)

        self._parent: Optional[ColliderBody] = None
        self._pos_handle: Optional[ListenerHandle] = None
        self._rot_handle: Optional[ListenerHandle] = None

        self.on_position: Event[PositionEvent] = Event()
        self.on_rotation: Event[RotationEvent] = Event()
        self.on_collision: Event[CollisionEvent] = Event()

    # --- forces -------------------------------------------------------

    def add_force(self, direction: Vec3, strength: float) -> None:
        self.force = self.force + direction * strength

    def add_torque(self, axis: Vec3, angle: float) -> None:
        if self.can_rotate:
            self.torque = self.torque + axis * -angle

    def add_force_at(self, pos: Vec3, direction: Vec3, strength: float) -> None:
        """Apply a force at a world point, adding torque for a long enough lever."""
        self.add_force(direction, strength)
        axis = (pos - self._position).cross(direction * strength)
        if axis.dot(axis) > 0.05:
            self.add_torque(axis, 0.03)

    def add_impulse_at(self, pos: Vec3, direction: Vec3) -> None:
        self.velocity = self.velocity + direction / self.mass
        lever = (pos - self._position).cross(direction * 0.05)
        self.angular_velocity = self.angular_velocity + lever / self.inertia

    # --- simulation ---------------------------------------------------

    def update(self, delta_time: float, gravity: Vec3) -> None:
        """Advance the body by one time step."""
        if not self.simulated:
            self.force = Vec3()
            self.torque = Vec3()
            return

        delta_sq = delta_time * delta_time
        self._position = (
            self._position + self.velocity * delta_time + self.acceleration * (delta_sq * 0.5)
        )
        acceleration = self.force / self.mass + gravity * float(self.has_gravity)
        self.velocity = self.velocity + (acceleration + self.acceleration) * (delta_time * 0.5)
        self.acceleration = acceleration

        if self.velocity.magnitude() > 0:
            self.on_position.invoke(PositionEvent.CHANGE, self._position)

        self.angular_velocity = self.angular_velocity + self.torque / self.inertia

        if self.angular_velocity.magnitude() > 0.1e-3:
            angular_acc = self._rotation.rotate(self.angular_velocity) * delta_time * delta_time
            length = angular_acc.magnitude()
            if length > 0:
                half = length * 0.5
                s, c = math.sin(half), math.cos(half)
                self.rotate(
                    Quaternion(angular_acc.x * s, angular_acc.y * s, angular_acc.z * s, length * c)
                )

        self.angular_velocity = self.angular_velocity - self.angular_velocity * (delta_time * 10)

        speed_sq = self.velocity.dot(self.velocity)
        self.torque = Vec3()

        if speed_sq > 0.1e-5:
            global_area = _abs(self._rotation.rotate(self.area))
            drag = 0.5 * AIR_DENSITY * speed_sq * self.drag_coefficient * global_area
            self.force = (delta_time * 2) * drag * -self.velocity.normalized()
        else:
            self.force = Vec3()

    @abstractmethod
    def check_collision(self, other: ColliderBody) -> Optional[CollisionData]:
        """Test for contact with another body; None when they do not touch."""

    @abstractmethod
    def _collide_with_box(self, box: "ColliderBox") -> Optional[CollisionData]:
        """Test this body against a box, reporting from this body's side."""

    # --- placement ----------------------------------------------------

    @property
    def position(self) -> Vec3:
        return self._position

    @position.setter
    def position(self, value: Vec3) -> None:
        self._position = value
        self.on_position.invoke(PositionEvent.CHANGE, self._position)

    def move(self, offset: Vec3) -> None:
        self.position = self._position + offset

    def move_local(self, offset: Vec3) -> None:
        self.local_position = self.local_position + offset

    @property
    def rotation(self) -> Quaternion:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Quaternion) -> None:
        self._rotation = value.normalized()
        self._update_axes()
        self.on_rotation.invoke(RotationEvent.CHANGE, self._rotation)

    def rotate(self, offset: Quaternion) -> None:
        self.rotation = offset * self._rotation

    def rotate_local(self, offset: Quaternion) -> None:
        self.local_rotation = offset * self.local_rotation

    @property
    def forward(self) -> Vec3:
        return self._forward

    @property
    def right(self) -> Vec3:
        return self._right

    @property
    def up(self) -> Vec3:
        return self._up

    def mult_velocity(self, mult: Vec3) -> None:
        self.velocity = self.velocity * mult

    def bounce(self, pos: Vec3, normal: Vec3, other: ColliderBody) -> None:
        """Push the body away from a contact point along the contact normal."""
        if not self.simulated:
            return
        speed = self.velocity.magnitude()
        lever = pos - self._position
        strength = (self.mass + other.mass) * speed * 80 * self.bounciness
        self.add_force(normal, strength)
        self.add_torque(lever.cross(normal * strength), 0.05)

        self.velocity = self.velocity * (1 - normal)
        self.angular_velocity = self.angular_velocity * (1 - normal)

    # --- hierarchy ----------------------------------------------------

    @property
    def parent(self) -> Optional[ColliderBody]:
        return self._parent

    def set_parent(self, parent: Optional[ColliderBody]) -> None:
        """Follow another body's motion, or detach when parent is None."""
        if self._parent is not None:
            self._parent.on_position.remove_listener(self._pos_handle)
            self._parent.on_rotation.remove_listener(self._rot_handle)
            self._parent = None
            self._pos_handle = self._rot_handle = None
        if parent is None:
            return
        self._parent = parent
        self._pos_handle = parent.on_position.add_listener(
            PositionEvent.CHANGE, self._follow_parent_position
        )
        self._rot_handle = parent.on_rotation.add_listener(
            RotationEvent.CHANGE, self._follow_parent_rotation
        )

    def _follow_parent_position(self, pos: Vec3) -> None:
        self.position = self._parent.rotation.matrix().transform(self.local_position) + pos

    def _follow_parent_rotation(self, rot: Quaternion) -> None:
        self.rotation = self.local_rotation * rot

    def _update_axes(self) -> None:
        m = self._rotation.matrix()
        self._right = m.x.normalized()
        self._up = m.y.normalized()
        self._forward = (-m.z).normalized()


class ColliderBox(ColliderBody):
    """An oriented box collider tested with the separating axis theorem."""

    def __init__(self, mass: float, size: Vec3 = Vec3(1.0, 1.0, 1.0),
                 position: Vec3 = Vec3()) -> None:
        sx, sy, sz = size
        super().__init__(
            mass,
            Vec3(
                mass * (sy * sy + sz * sz) / 12,
                mass * (sx * sx + sz * sz) / 12,
                mass * (sy * sy + sx * sx) / 12,
            ),
        )
        self.size = size
        self._position = position
        self.area = Vec3(sy * sz, sx * sz, sx * sy)
        self.on_position.invoke(PositionEvent.CHANGE, self._position)

    def check_collision(self, other: ColliderBody) -> Optional[CollisionData]:
        """Contact with another body, or None.

        The normal points from the other body toward this one, ``other`` is
        the body collided with and ``position`` is a corner of this box.
        """
        if not self.can_collide:
            return None
        return other._collide_with_box(self)

    def _collide_with_box(self, box: ColliderBox) -> Optional[CollisionData]:
        if not self.can_collide:
            return None
        rpos = box.position - self._position
        data = CollisionData()
        planes = (
            self._right, self._up, self._forward,
            box._right, box._up, box._forward,
            *(a.cross(b) for a in (self._right, self._up, self._forward)
              for b in (box._right, box._up, box._forward)),
        )
        if any(self._separating_plane(rpos, plane, self, box, data) for plane in planes):
            return None
        return data

    @staticmethod
    def _separating_plane(rpos: Vec3, plane: Vec3, box1: ColliderBox, box2: ColliderBox,
                          data: CollisionData) -> bool:
        if abs(plane.x) <= 0.01 and abs(plane.y) <= 0.01 and abs(plane.z) <= 0.01:
            return False

        proj = sum(
            abs((axis * extent).dot(plane))
            for box in (box1, box2)
            for axis, extent in (
                (box._right, box.size.x), (box._up, box.size.y), (box._forward, box.size.z)
            )
        )
        along = rpos.dot(plane)
        dist = abs(along)
        separation = proj - dist

        if abs(separation) < abs(data.mtv):
            data.mtv = separation
            normal = -plane if along < 0 else plane
            data.normal = normal.normalized() if normal.magnitude() != 0 else Vec3()

            vx, vy, vz = box2.size
            if box2._right.dot(data.normal) < 0:
                vx = -vx
            if box2._up.dot(data.normal) > 0:
                vy = -vy
            if box2._forward.dot(data.normal) >= 0:
                vz = -vz
            data.position = box2.rotation.matrix().transform(Vec3(vx, vy, vz)) + box2.position
            data.is_overlapping = abs(separation) > 0.0005
            data.other = box1

        return dist > proj