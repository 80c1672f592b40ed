import math


def clamp(value, min_value, max_value):
    return max(min_value, min(value, max_value))


def round_half_up(value):
    # half-way cases go towards +inf, unlike round()
    return int(math.floor(value + 0.5))


def time_mod(length_ms, bpm, clock_rate=1):
    length_ms = float(length_ms)
    bpm = float(bpm)
    if not clock_rate:
        clock_rate = 1

    length_mod, bpm_mod = length_ms/clock_rate, bpm*clock_rate
    return length_mod, bpm_mod
