"""A free-flying Euler-angle camera."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from flightsim.vecmath import look_at, normalize, perspective, vec3

YAW = -90.0
PITCH = 0.0
SPEED = 20.0
SENSITIVITY = 0.25
ZOOM = 45.0
NEAR = 0.1
FAR = 3000.0
PITCH_LIMIT = 89.0


class CameraMovement(Enum):
    """Directions understood by :meth:`Camera.process_keyboard`."""

    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"


class Camera:
    """Camera driven by yaw and pitch, with an optional view offset.

    ``offset`` is expressed along the camera's own front, up and right axes.
    """

    def __init__(self, position=None, up=None, yaw=YAW, pitch=PITCH):
        self.position = vec3(0, 0, 0) if position is None else np.asarray(position, dtype=float).copy()
        self.world_up = vec3(0, 1, 0) if up is None else np.asarray(up, dtype=float).copy()
        self.front = vec3(0, 0, -1)
        self.up = self.world_up.copy()
        self.right = vec3(1, 0, 0)
        self.offset = vec3(0, 0, 0)
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.movement_speed = SPEED
        self.mouse_sensitivity = SENSITIVITY
        self.zoom = ZOOM
        self.near = NEAR
        self.far = FAR
        self.update_vectors()

    def _offset_vector(self) -> np.ndarray:
        return self.front * self.offset[0] + self.up * self.offset[1] + self.right * self.offset[2]

    def view_matrix(self) -> np.ndarray:
        """View matrix looking along ``front`` from the offset eye point."""
        eye = self.position + self._offset_vector()
        return look_at(eye, eye + self.front, self.up)

    def projection_matrix(self, aspect) -> np.ndarray:
        """Perspective projection using ``zoom`` (degrees) as vertical field of view."""
        return perspective(math.radians(self.zoom), aspect, self.near, self.far)

    def vp_matrix(self, aspect) -> np.ndarray:
        """Projection times view."""
        return self.projection_matrix(aspect) @ self.view_matrix()

    def view_position(self) -> np.ndarray:
        """World position of the eye, including the offset."""
        return self.position + self._offset_vector()

    def keyboard_control(self, keys, delta_time) -> None:
        """Handle raw key state; the free camera has no key bindings of its own."""

    def process_keyboard(self, direction, delta_time) -> None:
        """Move along the front or right axis by ``movement_speed * delta_time``."""
        direction = CameraMovement(direction)
        velocity = self.movement_speed * delta_time
        if direction is CameraMovement.FORWARD:
            self.position = self.position + self.front * velocity
        elif direction is CameraMovement.BACKWARD:
            self.position = self.position - self.front * velocity
        elif direction is CameraMovement.LEFT:
            self.position = self.position - self.right * velocity
        elif direction is CameraMovement.RIGHT:
            self.position = self.position + self.right * velocity

    def process_mouse_movement(self, xoffset, yoffset, xpos=0.0, ypos=0.0, constrain_pitch=True) -> None:
        """Turn by mouse offsets, keeping pitch within +/-89 degrees if asked."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(max(self.pitch, -PITCH_LIMIT), PITCH_LIMIT)
        self.update_vectors()

    def process_mouse_scroll(self, yoffset) -> None:
        """Zoom by the wheel offset, keeping zoom within [1, 45]."""
        if 1.0 <= self.zoom <= 45.0:
            self.zoom -= yoffset
        self.zoom = min(max(self.zoom, 1.0), 45.0)

    def update_vectors(self) -> None:
        """Recompute front, right and up from yaw and pitch."""
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = vec3(
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        )
        self.front = normalize(front)
        self.right = normalize(np.cross(self.front, self.world_up))
        self.up = normalize(np.cross(self.right, self.front))