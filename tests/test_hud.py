import math

import pytest

from flightsim.aircraft import Aircraft
from flightsim.glyphs import number_segments, string_segments
from flightsim.hud import HudScreen, hud_lines, pitch_ladder_line, throttle_gauge


def _points(segments):
    for start, end in segments:
        yield start
        yield end


def test_throttle_gauge_stays_inside_its_cell():
    for x, y in _points(throttle_gauge(55.5, 70)):
        assert -0.7 - 1e-9 <= x <= -0.5 + 1e-9
        assert -0.95 - 1e-9 <= y <= -0.55 + 1e-9


def test_throttle_gauge_starts_with_baseline_from_centre():
    segments = throttle_gauge(30, 40)
    assert segments[0][0] == pytest.approx((-0.6, -0.75))


def test_needle_ends_at_gauge_centre():
    segments = throttle_gauge(30, 40)
    assert segments[100][1] == pytest.approx(segments[0][0])


def test_target_arc_grows_with_target():
    assert len(throttle_gauge(50, 80)) - len(throttle_gauge(50, 10)) == 70


def test_gauge_ends_with_thrust_readout():
    readout = number_segments(42.7, -0.51, -0.65, 0.03, 0.12)
    assert throttle_gauge(42.7, 50)[-len(readout):] == readout


def test_ladder_line_without_roll():
    segments = pitch_ladder_line(-0.2, 0.1, 0.2, 0.1, 0.0, 1.0, 10, 1.0)
    assert segments[0] == ((-0.2, 0.1), (0.2, 0.1))
    assert segments[1:] == number_segments(10, -0.2, 0.1, 0.03, 0.12, signed=True)


def test_ladder_line_aspect_scales_x_only():
    base = pitch_ladder_line(-0.2, 0.1, 0.2, 0.1, 0.0, 1.0, 10, 1.0)
    squeezed = pitch_ladder_line(-0.2, 0.1, 0.2, 0.1, 0.0, 1.0, 10, 0.5)
    assert squeezed[0][0][0] == pytest.approx(0.5 * base[0][0][0])
    assert squeezed[0][0][1] == pytest.approx(base[0][0][1])


def test_ladder_line_quarter_turn_labels_leftmost_end():
    x_start, y_start, x_end, y_end = -0.2, 0.3, 0.2, 0.1
    segments = pitch_ladder_line(x_start, y_start, x_end, y_end, 1.0, 0.0, 20, 1.0)
    assert segments[0][0] == pytest.approx((y_start, -x_start))
    assert segments[0][1] == pytest.approx((y_end, -x_end))
    anchor = segments[0][1]
    assert segments[1:] == number_segments(20, anchor[0], anchor[1], 0.03, 0.12, signed=True)


def test_negative_ladder_value_has_minus_sign():
    segments = pitch_ladder_line(-0.2, 0.1, 0.2, 0.1, 0.0, 1.0, -10, 1.0)
    minus = segments[-1]
    assert minus[0][1] == minus[1][1]
    assert minus[0][0] < -0.2


def test_paused_screen():
    aircraft = Aircraft()
    assert hud_lines(aircraft, HudScreen.PAUSED, 0) == string_segments("PAUSED", 0.68, 0.88, 0.05, 0.2)


def test_crash_screen():
    aircraft = Aircraft()
    expected = string_segments("CRASH", -0.25, 0, 0.1, 0.4) + string_segments(
        "PRESS R TO RESET", -0.32, -0.25, 0.04, 0.16
    )
    assert hud_lines(aircraft, HudScreen.CRASH, 1) == expected


def test_confirm_exit_screen():
    aircraft = Aircraft()
    expected = string_segments("CONFIRM EXIT ? Y/N", -0.72, 0, 0.08, 0.32)
    assert hud_lines(aircraft, HudScreen.CONFIRM_EXIT, 0) == expected


def test_screen_given_as_int():
    aircraft = Aircraft()
    assert hud_lines(aircraft, 2, 0) == hud_lines(aircraft, HudScreen.CONFIRM_RESET, 0)


def test_unknown_screen_raises():
    with pytest.raises(ValueError):
        hud_lines(Aircraft(), 9, 0)


def test_flight_screen_starts_with_frame_lines():
    lines = hud_lines(Aircraft(), HudScreen.FLIGHT, 0)
    assert lines[:2] == [((-0.5, -0.5), (-0.5, 0.5)), ((0.5, -0.5), (0.5, 0.5))]


def test_flight_screen_ends_with_gauge_and_scene_label():
    aircraft = Aircraft()
    lines = hud_lines(aircraft, HudScreen.FLIGHT, 1)
    label = string_segments("OCEAN", -0.98, 0.88, 0.05, 0.2)
    gauge = throttle_gauge(aircraft.thrust + 0.5, aircraft.target_thrust)
    assert lines[-len(label):] == label
    assert lines[-len(label) - len(gauge):-len(label)] == gauge


def test_unknown_scene_has_no_label():
    aircraft = Aircraft()
    lines = hud_lines(aircraft, HudScreen.FLIGHT, 7)
    gauge = throttle_gauge(aircraft.thrust + 0.5, aircraft.target_thrust)
    assert lines[-len(gauge):] == gauge


def test_flight_screen_points_are_finite_in_flight():
    aircraft = Aircraft()
    aircraft.process_mouse_movement(0, 0, 500, 250)
    for _ in range(30):
        aircraft.update(0.05)
    lines = hud_lines(aircraft, HudScreen.FLIGHT, 2)
    assert len(lines) > 100
    assert all(math.isfinite(c) for point in _points(lines) for c in point)