from ppsim.utils import clamp, round_half_up


def estimate_combo(beatmap_max_combo, count_miss=0, max_combo=None, percent_combo=None):
    """Returns ``(combo, perfect)`` for a simulated score.

    A requested combo (absolute, or a 0-100 percentage of the beatmap's max
    combo) can't go above the max combo minus one break per miss.
    """
    beatmap_max_combo = beatmap_max_combo or 0

    percentage = 100 if percent_combo is None else percent_combo
    multiplier = clamp(percentage, 0, 100) / 100

    if max_combo is None:
        max_combo = round_half_up(beatmap_max_combo * multiplier)

    limited_combo = min(max_combo, beatmap_max_combo - (count_miss or 0))
    combo = max(0, limited_combo)

    return combo, combo >= beatmap_max_combo
