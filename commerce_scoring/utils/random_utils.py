"""
Explicit, seeded pseudo-random streams.

Nothing in the scoring core touches a global RNG.  Components that need
simulated variation build a ``numpy.random.Generator`` from the subject
identifier (product id, user id, category text) and pass it down, so the
same subject always reproduces the same values.

Seed keys
---------
* ``int``  -> reduced modulo 2**32 (negative ids are valid subjects).
* ``str``  -> CRC-32 of the UTF-8 bytes (stable across processes, unlike
  ``hash()`` which is salted per interpreter run).
* ``None`` -> 0.
"""

from __future__ import annotations

import zlib

import numpy as np

_SEED_MODULUS = 2**32


def seed_entropy(*keys: int | str | None) -> list[int]:
    """Convert mixed seed keys into non-negative integers for ``SeedSequence``."""
    entropy: list[int] = []
    for key in keys:
        if key is None:
            entropy.append(0)
        elif isinstance(key, str):
            entropy.append(zlib.crc32(key.encode("utf-8")))
        else:
            entropy.append(int(key) % _SEED_MODULUS)
    return entropy or [0]


def seeded_generator(*keys: int | str | None) -> np.random.Generator:
    """Return a fresh ``numpy.random.Generator`` seeded from ``keys``.

    Two calls with equal keys yield generators that produce identical
    streams.

    Args:
        *keys: Subject identifiers; see module docstring for coercion rules.

    Returns:
        A new PCG64-backed generator.
    """
    return np.random.default_rng(seed_entropy(*keys))


def uniform_int(rng: np.random.Generator, low: int, high: int) -> int:
    """Draw an integer in ``[low, high)`` as a plain Python ``int``."""
    return int(rng.integers(low, high))


def unit_float(rng: np.random.Generator) -> float:
    """Draw a float in ``[0.0, 1.0)`` as a plain Python ``float``."""
    return float(rng.random())
