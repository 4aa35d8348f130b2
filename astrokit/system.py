"""A container that steps collider bodies and resolves their contacts."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from .body import ColliderBody, CollisionEvent
from .vecmath import Vec3

DEFAULT_GRAVITY = Vec3(0.0, -9.81, 0.0)
DEFAULT_SIM_STEPS = 4


class PhysicsSystem:
    """Owns a list of bodies, integrates them and resolves collisions."""

    def __init__(self, gravity: Vec3 = DEFAULT_GRAVITY, sim_steps: int = DEFAULT_SIM_STEPS) -> None:
        self.gravity = gravity
        self.sim_steps = sim_steps
        self._bodies: list[ColliderBody] = []
        self._to_remove: set[ColliderBody] = set()

    @property
    def bodies(self) -> tuple[ColliderBody, ...]:
        """The bodies currently in the system, in insertion order."""
        return tuple(self._bodies)

    def add(self, body: ColliderBody) -> ColliderBody:
        """Add an existing body to the system and return it."""
        self._bodies.append(body)
        return body

    def spawn(self, body_type: type[ColliderBody], *args: Any, **kwargs: Any) -> ColliderBody:
        """Construct a body of the given type, add it and return it."""
        return self.add(body_type(*args, **kwargs))

    def remove(self, body: ColliderBody) -> None:
        """Queue a body for removal at the end of the next update."""
        self._to_remove.add(body)

    def update(self, delta_time: float) -> None:
        """Advance every body and resolve contacts, then drop queued bodies."""
        for body in list(self._bodies):
            body.update(delta_time, self.gravity)
            for _ in range(self.sim_steps):
                for other in list(self._bodies):
                    if other is body:
                        continue
                    self._resolve(body, other)

        for body in self._to_remove:
            if body in self._bodies:
                self._bodies.remove(body)
        self._to_remove.clear()

    @staticmethod
    def _resolve(body: ColliderBody, other: ColliderBody) -> None:
        data = body.check_collision(other)
        if data is None:
            return

        if data.is_overlapping:
            body.on_collision.invoke(CollisionEvent.OVERLAP, data)
            other.on_collision.invoke(CollisionEvent.OVERLAP, replace(data, other=body))
        else:
            body.on_collision.invoke(CollisionEvent.TOUCH, data)

        if not body.simulated:
            return

        if data.is_overlapping:
            body.bounce(data.position, data.normal, other)
            other.bounce(data.position, -data.normal, body)
        else:
            body.mult_velocity(1 - data.normal)

        body.move(data.normal * (data.mtv * 2))