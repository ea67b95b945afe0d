"""Deterministic value-noise height field for procedural mountains."""

from __future__ import annotations

import math
import random
import struct

_MASK = 0xFFFFFFFF
_N = 624
_M = 397
_MATRIX_A = 0x9908B0DF
_UPPER = 0x80000000
_LOWER = 0x7FFFFFFF
_INIT_MULTIPLIER = 1812433253
_TWO_POW_32 = 4294967296.0

AMPLITUDE = 40.0
OCTAVES = 3
ROUGHNESS = 0.3
MAX_SEED = 1_000_000_000
_X_PRIME = 233
_Z_PRIME = 23333


def _f32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _temper(y: int) -> int:
    y ^= y >> 11
    y ^= (y << 7) & 0x9D2C5680
    y ^= (y << 15) & 0xEFC60000
    y ^= y >> 18
    return y & _MASK


def _seed_state(seed: int, length: int) -> list[int]:
    state = [seed & _MASK]
    for i in range(1, length):
        prev = state[-1]
        state.append((_INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i) & _MASK)
    return state


def _first_output(seed: int) -> int:
    """First 32-bit output of a generator seeded with ``seed``.

    Only the first ``_M + 1`` state words take part in it, so the rest of
    the state is never computed.
    """
    state = _seed_state(seed, _M + 1)
    y = (state[0] & _UPPER) | (state[1] & _LOWER)
    value = state[_M] ^ (y >> 1) ^ (_MATRIX_A if y & 1 else 0)
    return _temper(value)


def _canonical_float(u32: int) -> float:
    """Map a 32-bit output onto [0, 1) with single precision."""
    result = _f32(float(u32)) / _TWO_POW_32
    if result >= 1.0:
        result = _f32(math.nextafter(1.0, 0.0))
    return result


class MT19937:
    """The 32-bit Mersenne Twister; seeds are taken modulo 2**32."""

    def __init__(self, seed=5489):
        self._state = _seed_state(int(seed) & _MASK, _N)
        self._index = _N

    def _twist(self) -> None:
        mt = self._state
        for i in range(_N):
            y = (mt[i] & _UPPER) | (mt[(i + 1) % _N] & _LOWER)
            mt[i] = mt[(i + _M) % _N] ^ (y >> 1) ^ (_MATRIX_A if y & 1 else 0)
        self._index = 0

    def next_u32(self) -> int:
        """Next 32-bit output."""
        if self._index >= _N:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        return _temper(y)

    def next_float(self) -> float:
        """Next single-precision float uniformly drawn from [0, 1)."""
        return _canonical_float(self.next_u32())


def interpolate(a, b, blend) -> float:
    """Cosine interpolation from ``a`` (blend 0) to ``b`` (blend 1)."""
    f = (1.0 - math.cos(blend * math.pi)) * 0.5
    return a * (1.0 - f) + b * f


class HeightGenerator:
    """Octave value noise seeded once; heights are pure functions of (x, z)."""

    def __init__(self, seed=None):
        self.seed = random.randint(0, MAX_SEED) if seed is None else int(seed)
        self.amplitude = AMPLITUDE
        self.octaves = OCTAVES
        self.roughness = ROUGHNESS
        self.x_offset = 0
        self.z_offset = 0
        self._noise_cache: dict[tuple[int, int], float] = {}
        self._smooth_cache: dict[tuple[int, int], float] = {}

    def noise(self, x, z) -> float:
        """Pseudo-random value in [-1, 1) fixed by the seed and lattice point."""
        key = (int(x), int(z))
        cached = self._noise_cache.get(key)
        if cached is None:
            point_seed = (self.seed + key[0] * _X_PRIME + key[1] * _Z_PRIME) & _MASK
            cached = _f32(_canonical_float(_first_output(point_seed)) * 2.0 - 1.0)
            self._noise_cache[key] = cached
        return cached

    def smooth_noise(self, x, z) -> float:
        """Noise blurred with its eight neighbours (corners 1/16, sides 1/8, centre 1/4)."""
        key = (int(x), int(z))
        cached = self._smooth_cache.get(key)
        if cached is None:
            x, z = key
            n = self.noise
            corners = (n(x - 1, z - 1) + n(x + 1, z - 1) + n(x - 1, z + 1) + n(x + 1, z + 1)) / 16.0
            sides = (n(x - 1, z) + n(x + 1, z) + n(x, z - 1) + n(x, z + 1)) / 8.0
            center = n(x, z) / 4.0
            cached = corners + sides + center
            self._smooth_cache[key] = cached
        return cached

    def interpolated_noise(self, x, z) -> float:
        """Smooth noise at fractional coordinates, truncated towards zero for the cell."""
        int_x = int(x)
        int_z = int(z)
        frac_x = x - int_x
        frac_z = z - int_z
        v1 = self.smooth_noise(int_x, int_z)
        v2 = self.smooth_noise(int_x + 1, int_z)
        v3 = self.smooth_noise(int_x, int_z + 1)
        v4 = self.smooth_noise(int_x + 1, int_z + 1)
        i1 = interpolate(v1, v2, frac_x)
        i2 = interpolate(v3, v4, frac_x)
        return interpolate(i1, i2, frac_z)

    def generate_height(self, x, z) -> float:
        """Sum of the octaves of interpolated noise at grid point (x, z)."""
        total = 0.0
        d = 2.0 ** (self.octaves - 1)
        for i in range(self.octaves):
            freq = 2.0**i / d
            amp = self.roughness**i * self.amplitude
            total += self.interpolated_noise((x + self.x_offset) * freq, (z + self.z_offset) * freq) * amp
        return total