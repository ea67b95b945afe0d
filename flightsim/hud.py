"""Head-up display layout as line segments in normalized screen space.

Screen space runs from -1 to 1 on both axes. Each segment is a pair of
``(x, y)`` points, ready to be drawn as a line list.
"""

from __future__ import annotations

import math
from enum import IntEnum

import numpy as np

from flightsim.glyphs import Segment, number_segments, string_segments

SCENE_NAMES = {0: "MOUNTAIN", 1: "OCEAN", 2: "AIRPORT"}

# Cell holding the throttle gauge: left, right, top, bottom.
_GAUGE_LEFT = -0.7
_GAUGE_RIGHT = -0.5
_GAUGE_TOP = -0.55
_GAUGE_BOTTOM = -0.95
_GAUGE_STEP = 0.044
_LADDER_SCALE = 0.0624763


class HudScreen(IntEnum):
    """What the head-up display shows."""

    FLIGHT = 0
    PAUSED = 1
    CONFIRM_RESET = 2
    CRASH = 3
    CONFIRM_EXIT = 4

    @property
    def color(self) -> tuple[float, float, float]:
        """Line colour: green in flight, red on every overlay screen."""
        if self is HudScreen.FLIGHT:
            return (0.0, 0.86, 0.25)
        return (0.88, 0.1, 0.25)


def _gauge_point(u: float, v: float) -> tuple[float, float]:
    return (
        u * _GAUGE_RIGHT + _GAUGE_LEFT * (1 - u),
        v * _GAUGE_TOP + _GAUGE_BOTTOM * (1 - v),
    )


def _arc(radius: float, step: float) -> tuple[float, float]:
    angle = _GAUGE_STEP * step
    return (radius * math.cos(angle) + 0.5, 0.5 - radius * math.sin(angle))


def _gauge_segment(start: tuple[float, float], end: tuple[float, float]) -> Segment:
    return (_gauge_point(*start), _gauge_point(*end))


def throttle_gauge(thrust, target_thrust) -> list[Segment]:
    """Dial showing current thrust (needle) and target thrust (outer arc)."""
    thrust = float(thrust)
    target = float(target_thrust)
    segments: list[Segment] = [_gauge_segment((0.5, 0.5), (0.98, 0.5))]
    segments.extend(_gauge_segment(_arc(0.45, i), _arc(0.45, i + 1)) for i in range(99))
    segments.append(_gauge_segment(_arc(0.45, thrust), (0.5, 0.5)))
    steps = max(0, math.ceil(target - 1))
    segments.extend(_gauge_segment(_arc(0.48, i), _arc(0.48, i + 1)) for i in range(steps))
    segments.append(_gauge_segment(_arc(0.48, steps), _arc(0.48, target)))
    segments.append(_gauge_segment(_arc(0.45, target), _arc(0.48, target)))
    segments.extend(number_segments(thrust, -0.51, -0.65, 0.03, 0.12))
    return segments


def pitch_ladder_line(x_start, y_start, x_end, y_end, sin_roll, cos_roll, value, aspect) -> list[Segment]:
    """One rung of the pitch ladder, rotated by the roll angle and labelled.

    ``aspect`` is the viewport height over its width; the label is drawn at
    the left end of the rung.
    """
    x1 = (x_start * cos_roll + y_start * sin_roll) * aspect
    y1 = y_start * cos_roll - x_start * sin_roll
    x2 = (x_end * cos_roll + y_end * sin_roll) * aspect
    y2 = y_end * cos_roll - x_end * sin_roll
    segments: list[Segment] = [((float(x1), float(y1)), (float(x2), float(y2)))]
    anchor_x, anchor_y = (x1, y1) if x1 < x2 else (x2, y2)
    segments.extend(number_segments(value, float(anchor_x), float(anchor_y), 0.03, 0.12, signed=True))
    return segments


def _speed_tape(aircraft) -> list[Segment]:
    ias = float(aircraft.ias)
    segments = number_segments(ias * 60, -0.61, 0.0, 0.05, 0.2)
    segments += [
        ((-0.85, 0.11), (-0.6, 0.11)),
        ((-0.6, -0.11), (-0.6, 0.11)),
        ((-0.6, -0.11), (-0.85, -0.11)),
    ]
    scaled = ias * 3 if ias > 0 else 0.0
    for mark in range(int(scaled - 2), math.floor(scaled + 3) + 1):
        if mark < 0:
            continue
        position = (mark - scaled) / 6
        segments.append(((-0.54, position), (-0.5, position)))
        segments += number_segments(mark * 20, -0.54, position, 0.015, 0.06)
    return segments


def _altitude_tape(aircraft) -> list[Segment]:
    altitude = float(aircraft.position[1])
    segments = number_segments(altitude * 100 + 20000, 0.86, 0.0, 0.05, 0.2, signed=True)
    segments += [
        ((0.85, 0.11), (0.6, 0.11)),
        ((0.6, -0.11), (0.6, 0.11)),
        ((0.6, -0.11), (0.85, -0.11)),
    ]
    for mark in range(int(altitude - 6), math.floor(altitude + 5) + 1):
        position = (mark - altitude) / 11
        if position < -0.5:
            continue
        segments.append(((0.52, position), (0.5, position)))
        segments += number_segments(mark * 100 + 20000, 0.60, position, 0.015, 0.06, signed=True)
    segments += number_segments(float(aircraft.airspeed[1]) * 6000, 0.48, -0.54, 0.02, 0.08, signed=True)
    return segments


def _pitch_ladder(aircraft) -> list[Segment]:
    front = np.asarray(aircraft.front, dtype=float)
    level = np.array([front[0], 0.0, front[2]])
    level_length = float(np.linalg.norm(level))
    if level_length < 1e-9:
        return []
    level_dir = level / level_length
    vp = aircraft.vp_matrix(aircraft.aspect)
    horizon = np.append(aircraft.view_position() + level_dir, 1.0)
    horizon[1] -= front[1]
    side = np.array([level[2], 0.0, -level[0], 0.0])
    a = vp @ (horizon + side)
    b = vp @ (horizon - side)
    roll = np.array([(b[0] - a[0]) * aircraft.aspect, b[1] - a[1]])
    roll_length = float(np.linalg.norm(roll))
    if roll_length < 1e-12:
        return []
    roll_x, roll_y = roll / roll_length

    pitch = math.acos(min(max(float(np.dot(level_dir, front)), -1.0), 1.0))
    if front[1] < 0:
        pitch = -pitch
    pitch = math.degrees(pitch)
    whole = int(pitch)
    start = whole - int(math.fmod(whole, 5)) - 20
    height_over_width = 1.0 / aircraft.aspect

    segments: list[Segment] = []
    for mark in range(start, whole + 16, 5):
        if mark < -90 or mark > 90:
            continue
        offset = (mark - pitch) * _LADDER_SCALE
        if offset < -0.6 or offset >= 0.6:
            continue
        if mark == 0:
            length = 3.0
        elif mark % 30 == 0:
            length = 1.5
        elif mark % 10 == 0:
            length = 1.0
        else:
            length = 0.5
        length /= 5
        segments += pitch_ladder_line(
            -length, offset, length, offset, float(-roll_y), float(roll_x), mark, height_over_width
        )
    return segments


def _compass(aircraft) -> list[Segment]:
    heading = aircraft.heading()
    segments: list[Segment] = []
    for mark in range(0, 359, 5):
        if mark % 10:
            tick = 0.05
        elif mark % 30:
            tick = 0.08
        elif mark % 90:
            tick = 0.12
        else:
            tick = 0.2
        angle = math.radians(mark - heading)
        top = -2 + 1.2 * math.cos(angle)
        if top < -1:
            continue
        segments.append(
            (
                (0.6 * (1.2 - tick) * math.sin(angle), -2 + (1.2 - tick) * math.cos(angle)),
                (0.72 * math.sin(angle), top),
            )
        )
    segments += number_segments(heading, 0.045, -0.74, 0.025, 0.1)
    return segments


def _flight_lines(aircraft, scene) -> list[Segment]:
    segments: list[Segment] = [
        ((-0.5, -0.5), (-0.5, 0.5)),
        ((0.5, -0.5), (0.5, 0.5)),
        ((-0.05, -0.05), (0.0, 0.0)),
        ((0.05, -0.05), (0.0, 0.0)),
        ((-0.5, 0.0), (-0.6, 0.0)),
        ((0.5, 0.0), (0.6, 0.0)),
    ]
    segments += _speed_tape(aircraft)
    segments += _altitude_tape(aircraft)
    segments += _pitch_ladder(aircraft)
    segments += _compass(aircraft)
    segments += throttle_gauge(float(aircraft.thrust) + 0.5, aircraft.target_thrust)
    name = SCENE_NAMES.get(scene)
    if name is not None:
        segments += string_segments(name, -0.98, 0.88, 0.05, 0.2)
    return segments


def hud_lines(aircraft, screen, scene) -> list[Segment]:
    """All segments of the display for ``screen``; ``scene`` picks the map label."""
    screen = HudScreen(screen)
    if screen is HudScreen.FLIGHT:
        return _flight_lines(aircraft, scene)
    if screen is HudScreen.PAUSED:
        return string_segments("PAUSED", 0.68, 0.88, 0.05, 0.2)
    if screen is HudScreen.CONFIRM_RESET:
        return string_segments("CONFIRM RESET? Y/N", -0.72, 0.0, 0.08, 0.32)
    if screen is HudScreen.CRASH:
        return string_segments("CRASH", -0.25, 0.0, 0.1, 0.4) + string_segments(
            "PRESS R TO RESET", -0.32, -0.25, 0.04, 0.16
        )
    return string_segments("CONFIRM EXIT ? Y/N", -0.72, 0.0, 0.08, 0.32)