"""Hit statistics and their generation from sparse score targets.

Each generator turns an accuracy (0-1, or 0-100 which gets scaled down), a
miss count and optional explicit 100/50 counts into a full breakdown that
fits the beatmap's object counts. Inputs out of range are clamped and never
rejected. The counts a generator does not clamp on output are left as-is on
purpose so the results stay consistent with the accuracy formulas.
"""
from ppsim.enums import HitResult
from ppsim.utils import clamp, round_half_up


def get_valid_hit_statistics(original=None):
    """Returns a breakdown where every hit result kind is present."""
    original = original or {}
    return {kind: original.get(kind) or 0 for kind in HitResult.ALL}


def normalize_accuracy(accuracy):
    if accuracy is None:
        return 1.0
    accuracy = float(accuracy)
    if accuracy > 1:
        accuracy /= 100
    return accuracy


def generate_osu_hit_statistics(attributes, accuracy=1, count_miss=0,
    count_50=None, count_100=None):
    total_hits = attributes.total_hits

    count_miss = clamp(count_miss or 0, 0, total_hits)

    count_50 = clamp(count_50, 0, total_hits - count_miss) if count_50 else 0

    if count_100 is None:
        count_100 = round_half_up((total_hits - total_hits * accuracy) * 1.5)
    else:
        count_100 = clamp(count_100, 0, total_hits - count_50 - count_miss)

    count_300 = total_hits - count_100 - count_50 - count_miss

    return get_valid_hit_statistics({
        HitResult.GREAT: count_300,
        HitResult.OK: count_100,
        HitResult.MEH: count_50,
        HitResult.MISS: count_miss,
    })


def generate_taiko_hit_statistics(attributes, accuracy=1, count_miss=0,
    count_50=None, count_100=None):
    total_hits = attributes.total_hits

    count_miss = clamp(count_miss or 0, 0, total_hits)

    if count_100 is None:
        target_total = round_half_up(accuracy * total_hits * 2)
        count_300 = target_total - (total_hits - count_miss)
        count_100 = total_hits - count_300 - count_miss
    else:
        count_100 = clamp(count_100, 0, total_hits - count_miss)
        count_300 = total_hits - count_100 - count_miss

    return get_valid_hit_statistics({
        HitResult.GREAT: count_300,
        HitResult.OK: count_100,
        HitResult.MISS: count_miss,
    })


def generate_catch_hit_statistics(attributes, accuracy=1, count_miss=0,
    count_50=None, count_100=None):
    max_combo = attributes.max_combo
    max_fruits = attributes.max_fruits
    max_droplets = attributes.max_droplets
    max_tiny_droplets = attributes.max_tiny_droplets

    count_miss = count_miss or 0

    # droplets below the ceiling are missed droplets
    if count_100 is not None:
        count_miss += max_droplets - count_100

    count_miss = clamp(count_miss, 0, max_droplets + max_fruits)

    count_droplets = count_100 if count_100 is not None else max(0, max_droplets - count_miss)
    count_droplets = clamp(count_droplets, 0, max_droplets)

    count_fruits = max_fruits - (count_miss - (max_droplets - count_droplets))

    count_tiny_droplets = round_half_up(accuracy * (max_combo + max_tiny_droplets))
    if count_50 is not None:
        count_tiny_droplets = count_50
    else:
        count_tiny_droplets -= count_fruits + count_droplets

    count_tiny_misses = max_tiny_droplets - count_tiny_droplets

    return get_valid_hit_statistics({
        HitResult.GREAT: clamp(count_fruits, 0, max_fruits),
        HitResult.LARGE_TICK_HIT: clamp(count_droplets, 0, max_droplets),
        HitResult.SMALL_TICK_HIT: count_tiny_droplets,
        HitResult.SMALL_TICK_MISS: count_tiny_misses,
        HitResult.MISS: count_miss,
    })


def generate_mania_hit_statistics(attributes, accuracy=1, count_miss=0,
    count_50=None, count_100=None):
    # mania scores are driven by total score, not by the hit distribution
    return get_valid_hit_statistics({
        HitResult.PERFECT: attributes.total_hits,
    })
