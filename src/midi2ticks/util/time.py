from __future__ import annotations
import math

MICROS_PER_SECOND = 1_000_000

def ppq_to_seconds(delta: int, tempo: int, ppq: int) -> float:
    return delta * tempo / (ppq * MICROS_PER_SECOND)

def round_half_up(x: float) -> int:
    # halbe Werte weg von Null (0.5 -> 1, -0.5 -> -1)
    if x < 0:
        return -int(math.floor(-x + 0.5))
    return int(math.floor(x + 0.5))

def seconds_to_tick(seconds: float, ticks_per_second: int) -> int:
    return round_half_up(seconds * ticks_per_second)
