"""User overrides for approach rate, overall difficulty, circle size and
clock rate.

Unlocked values are the beatmap values before mods, so HR/EZ multipliers
are applied on top. Locked values are what the player should see in the
end, so the beatmap value is back-solved through the clock rate.
"""
import logging

from ppsim.enums import GameMode
from ppsim.utils import clamp

logger = logging.getLogger(__name__)

AR0_MS = 1800.0
AR5_MS = 1200.0
AR10_MS = 450.0

OD0_MS = 80.0
OD5_MS = 50.0
OD10_MS = 20.0


def clamp_stats(value, has_dt=False):
    return clamp(value, 0, 11 if has_dt else 10)


def clamp_rate(value):
    return clamp(value, 0.25, 10)


def clamp_bpm(value):
    return clamp(value, 1, 10000)


def approach_rate_to_ms(approach_rate):
    if approach_rate <= 5:
        return AR0_MS - approach_rate * (AR0_MS - AR5_MS) / 5
    return AR5_MS - (approach_rate - 5) * (AR5_MS - AR10_MS) / 5


def ms_to_approach_rate(preempt):
    if preempt <= AR5_MS:
        return ((preempt - AR5_MS) * 5 / (AR10_MS - AR5_MS)) + 5
    return 5 - ((preempt - AR5_MS) * 5 / (AR0_MS - AR5_MS))


def overall_difficulty_to_ms(overall_difficulty):
    return OD0_MS - 6 * overall_difficulty


def ms_to_overall_difficulty(hit_window):
    if hit_window <= OD5_MS:
        return ((hit_window - OD5_MS) * 5 / (OD10_MS - OD5_MS)) + 5
    return 5 - ((hit_window - OD5_MS) * 5 / (OD0_MS - OD5_MS))


def _is_locked(stats, field):
    return bool(getattr(stats, 'lock_stats', False) or getattr(stats, field, False))


def _multiplier(mods, hard_rock, easy):
    if mods is not None and mods.has('HR'):
        return hard_rock
    if mods is not None and mods.has('EZ'):
        return easy
    return 1


def scale_circle_size(circle_size, mods, stats):
    custom = getattr(stats, 'circle_size', None)
    if custom is None:
        return circle_size

    if _is_locked(stats, 'lock_circle_size'):
        custom /= _multiplier(mods, 1.3, 0.5)

    return clamp_stats(custom)


def scale_clock_rate(clock_rate, bpm_mode, stats):
    custom_rate = getattr(stats, 'clock_rate', None)
    if custom_rate is not None:
        return clamp_rate(custom_rate)

    bpm = getattr(stats, 'bpm', None)
    # rate mods win over a bpm override
    if bpm is not None and clock_rate == 1 and bpm_mode:
        return clamp_bpm(bpm) / bpm_mode

    return clock_rate


def scale_approach_rate(approach_rate, mode, mods, clock_rate, stats):
    custom = getattr(stats, 'approach_rate', None)
    if custom is None:
        return approach_rate

    has_dt = mods is not None and mods.has('DT')

    if not _is_locked(stats, 'lock_approach_rate'):
        return clamp_stats(custom * _multiplier(mods, 1.4, 0.5), has_dt)

    final_ar = clamp_stats(custom, has_dt)
    if mode not in (GameMode.OSU, GameMode.FRUITS):
        return final_ar

    adjusted_preempt = approach_rate_to_ms(final_ar) * clock_rate
    return ms_to_approach_rate(adjusted_preempt)


def scale_overall_difficulty(overall_difficulty, mode, mods, clock_rate, stats):
    custom = getattr(stats, 'overall_difficulty', None)
    if custom is None:
        return overall_difficulty

    has_dt = mods is not None and mods.has('DT')

    if not _is_locked(stats, 'lock_overall_difficulty'):
        return clamp_stats(custom * _multiplier(mods, 1.4, 0.5), has_dt)

    final_od = clamp_stats(custom, has_dt)
    if mode != GameMode.OSU:
        return final_od

    adjusted_window = overall_difficulty_to_ms(final_od) * clock_rate
    return ms_to_overall_difficulty(adjusted_window)


def apply_custom_circle_size(beatmap, mods, stats):
    """Overrides circle size before mods are applied, HR and EZ scale it later."""
    if stats is None:
        return beatmap
    circle_size = scale_circle_size(beatmap.base_difficulty.circle_size, mods, stats)
    beatmap.base_difficulty.circle_size = circle_size
    beatmap.difficulty.circle_size = circle_size
    return beatmap


def apply_custom_stats(beatmap, mods, stats):
    """Applies rate, AR and OD overrides to a beatmap that already has mods
    applied."""
    if stats is None:
        return beatmap

    difficulty = beatmap.difficulty
    difficulty.clock_rate = scale_clock_rate(difficulty.clock_rate,
        beatmap.bpm_mode, stats)

    difficulty.approach_rate = scale_approach_rate(difficulty.approach_rate,
        beatmap.mode, mods, difficulty.clock_rate, stats)
    difficulty.overall_difficulty = scale_overall_difficulty(
        difficulty.overall_difficulty, beatmap.mode, mods, difficulty.clock_rate, stats)

    logger.debug('Custom stats applied: {}'.format(difficulty))
    return beatmap
