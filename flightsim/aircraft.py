"""Flight model of the player's aircraft and the chase camera around it."""

from __future__ import annotations

import math

import numpy as np

from flightsim.bounding_box import BoundingBox
from flightsim.camera import Camera
from flightsim.vecmath import look_at, normalize, scale, vec3

# Hit boxes as (centre, half extents) in the aircraft's own frame.
_HITBOXES = (
    ((0.01, 0.0, 0.0), (0.21, 0.032, 0.032)),
    ((-0.037, 0.0, 0.0), (0.056, 0.005, 0.15)),
    ((-0.165, 0.0, 0.0), (0.035, 0.005, 0.09)),
    ((-0.16, 0.05, 0.0), (0.05, 0.05, 0.005)),
)

MODEL_SCALE = 0.2
MIN_THRUST = 20.0
MAX_TARGET_THRUST = 100.0
ORBIT_TURN_RATE = 40.0
ORBIT_MIN_DISTANCE = 0.4
ORBIT_PITCH_LIMIT = 89.0


def world_up_rotate(v, angle) -> np.ndarray:
    """Rotate ``v`` by ``angle`` radians about the world's vertical axis."""
    c, s = math.cos(angle), math.sin(angle)
    x, y, z = np.asarray(v, dtype=float)
    return vec3(x * c + z * s, y, -x * s + z * c)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class Aircraft(Camera):
    """The aircraft: a simple arcade flight model that is also a cockpit camera.

    ``front``, ``up`` and ``right`` form the aircraft's body frame. Controls
    come from the mouse position (stick) and the F1/F4 keys (throttle).
    """

    def __init__(self, viewport_width=800, viewport_height=600):
        if viewport_width <= 0 or viewport_height <= 0:
            raise ValueError("viewport dimensions must be positive")
        super().__init__()
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.position = vec3(0.0, -100.0, 0.0)
        self.world_up = vec3(0, 1, 0)
        self.front = vec3(1, 0, 0)
        self.up = vec3(0, 1, 0)
        self.right = np.cross(self.front, self.up)
        self.airspeed = vec3(0, 0, 0)
        self.ias = 0.0
        self.in_air = True
        self.thrust = MIN_THRUST
        self.target_thrust = MIN_THRUST
        self.control_x = 0.0
        self.control_y = 0.0
        self.model_matrix = self._frame_matrix()
        self.bounding_boxes = [BoundingBox(self.model_matrix, p, s) for p, s in _HITBOXES]
        self.around_camera = AroundCamera(self)

    @property
    def aspect(self) -> float:
        """Viewport width over height."""
        return self.viewport_width / self.viewport_height

    def _frame_matrix(self) -> np.ndarray:
        m = np.identity(4)
        m[:3, 0] = self.front
        m[:3, 1] = self.up
        m[:3, 2] = self.right
        m[:3, 3] = self.position
        return m

    def update(self, delta_time) -> None:
        """Advance the flight model by ``delta_time`` seconds."""
        dt = delta_time
        ias = self.ias
        acc = self.up * ias * _clamp(ias, 0.0, 6.0) * 0.06
        side = normalize(np.cross(self.front, self.world_up))
        yaw = -float(np.dot(acc, side)) / (ias if ias > 0.5 else 0.5) * 3.0 * dt
        up_dot = float(np.dot(self.up, self.world_up))
        acc = acc * _clamp(up_dot, 0.2, 1.0)
        acc = acc + (
            -self.airspeed * 0.4 * _clamp(abs(up_dot), 0.3, 0.75)
            + self.thrust * self.front * 0.02 * _clamp(1.0 - self.position[1] / 200.0, 0.1, 1.0)
        )
        self.up = world_up_rotate(self.up, yaw)
        self.front = world_up_rotate(self.front, yaw)
        self.right = world_up_rotate(self.right, yaw)
        acc[1] -= 0.8
        if not self.in_air and acc[1] < 0:
            acc[1] = 0.0

        control = 0.002 * (4.0 + _clamp(ias, 0.0, 3.0) * 1.1)
        front_before = self.front
        self.front = normalize(self.front + control * self.control_y * self.up)
        up = self.up + control * self.control_x * self.right
        self.up = normalize(up - np.dot(up, self.front) * self.front)
        self.right = np.cross(self.front, self.up)

        self.position = self.position + self.airspeed * dt
        self.airspeed = self.airspeed + (self.front - front_before) * ias * 0.8
        self.airspeed = self.airspeed + acc * dt
        self.thrust += (max(self.target_thrust, MIN_THRUST) - self.thrust) * dt * 0.45
        self.ias = float(np.dot(self.airspeed, self.front))

        # Hit boxes follow the model matrix of the previous step.
        for box in self.bounding_boxes:
            box.update(self.model_matrix)
        self.model_matrix = self._frame_matrix()

    def keyboard_control(self, keys, delta_time) -> None:
        """Adjust target thrust with "F1" (down) and "F4" (up) held in ``keys``."""
        if "F1" in keys:
            self.target_thrust -= 1.0
        if "F4" in keys:
            self.target_thrust += 1.0
        self.target_thrust = _clamp(self.target_thrust, 0.0, MAX_TARGET_THRUST)

    def process_keyboard(self, direction, delta_time) -> None:
        """Movement keys do not steer the aircraft."""

    def process_mouse_movement(self, xoffset, yoffset, xpos=0.0, ypos=0.0, constrain_pitch=True) -> None:
        """Set the stick from the cursor position relative to the viewport centre."""
        self.control_x = xpos / self.viewport_width - 0.5
        self.control_y = ypos / self.viewport_height - 0.5

    def process_mouse_scroll(self, yoffset) -> None:
        """The scroll wheel has no effect on the aircraft."""

    def heading(self) -> float:
        """Compass heading in degrees, in [0, 360)."""
        dx, dz = normalize(vec3(self.front[0], self.front[2], 0.0))[:2]
        angle = math.degrees(math.asin(_clamp(float(dx), -1.0, 1.0)))
        if dz < 0:
            return angle + 270.0
        return 90.0 - angle

    def detect_crash(self, point) -> bool:
        """True when the world-space ``point`` lies inside any hit box."""
        return any(box.contains(point) for box in self.bounding_boxes)

    def render_model_matrix(self) -> np.ndarray:
        """Model matrix used to draw the aircraft mesh."""
        return scale(self.model_matrix, vec3(MODEL_SCALE, MODEL_SCALE, MODEL_SCALE))


class AroundCamera(Camera):
    """Camera orbiting a target at a distance, steered with W/A/S/D."""

    def __init__(self, target):
        super().__init__()
        self.target = target
        self.distance = 2.0

    def keyboard_control(self, keys, delta_time) -> None:
        """Orbit with "A"/"D" (yaw) and "W"/"S" (pitch) held in ``keys``."""
        step = ORBIT_TURN_RATE * delta_time
        if "A" in keys:
            self.yaw += step
        if "D" in keys:
            self.yaw -= step
        if "W" in keys:
            self.pitch += step
        if "S" in keys:
            self.pitch -= step
        self.pitch = _clamp(self.pitch, -ORBIT_PITCH_LIMIT, ORBIT_PITCH_LIMIT)
        self.update_vectors()

    def process_keyboard(self, direction, delta_time) -> None:
        """Movement keys do not move the orbit camera."""

    def process_mouse_movement(self, xoffset, yoffset, xpos=0.0, ypos=0.0, constrain_pitch=True) -> None:
        """Mouse movement does not turn the orbit camera."""

    def process_mouse_scroll(self, yoffset) -> None:
        """Move closer or further; never nearer than 0.4."""
        self.distance = max(self.distance - yoffset, ORBIT_MIN_DISTANCE)

    def view_matrix(self) -> np.ndarray:
        """Look at the target from ``distance`` along the camera's front axis."""
        target = np.asarray(self.target.position, dtype=float)
        return look_at(target + self.front * self.distance, target, self.up)

    def view_position(self) -> np.ndarray:
        """World position of the eye."""
        return np.asarray(self.target.position, dtype=float) + self.front * self.distance