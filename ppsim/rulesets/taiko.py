import math

from ppsim.core.attributes import DifficultyAttributes, PerformanceAttributes
from ppsim.core.hit_statistics import generate_taiko_hit_statistics
from ppsim.enums import GameMode, HitResult
from ppsim.utils import clamp
from .rosu_difficulty import RosuDifficultyCalculator
from .ruleset import (PerformanceCalculator, Ruleset, RATIO_RANK_TABLE,
    hit_ratio_rank_values)


def scale_overall_difficulty(overall_difficulty, mods):
    if mods.has('EZ'):
        overall_difficulty /= 2
    if mods.has('HR'):
        overall_difficulty *= 1.4
    return clamp(overall_difficulty, 0, 10)


def get_great_hit_window(overall_difficulty, mods):
    """Great hit window in ms for a file OD, with mods and clock rate applied."""
    overall_difficulty = scale_overall_difficulty(overall_difficulty, mods)
    max_val = 20
    min_val = 50
    result = min_val + (max_val - min_val) * overall_difficulty / 10
    result = math.floor(result) - 0.5
    result /= mods.clock_rate

    # 2 decimals
    return round(result * 100) / 100


class TaikoDifficultyAttributes(DifficultyAttributes):
    def __init__(self, mods=None, star_rating=0.0, max_combo=0,
        great_hit_window=0.0, overall_difficulty=5.0):
        super().__init__(mods, star_rating, max_combo)
        self.great_hit_window = great_hit_window
        # file OD, only used when no hit window is known
        self.overall_difficulty = overall_difficulty


class TaikoPerformanceAttributes(PerformanceAttributes):
    def __init__(self, mods=None, total_performance=0.0, strain_performance=0.0,
        accuracy_performance=0.0):
        super().__init__(mods, total_performance)
        self.strain_performance = strain_performance
        self.accuracy_performance = accuracy_performance


class TaikoDifficultyCalculator(RosuDifficultyCalculator):
    def _create_attributes(self, beatmap, mods, result):
        return TaikoDifficultyAttributes(
            mods=mods,
            star_rating=result.stars,
            max_combo=result.max_combo,
            great_hit_window=result.great_hit_window or 0.0,
            overall_difficulty=beatmap.base_difficulty.overall_difficulty)


class TaikoPerformanceCalculator(PerformanceCalculator):
    def calculate_attributes(self):
        difficulty = self.difficulty
        score = self.score_info
        mods = score.mods if score.mods is not None else difficulty.mods

        stars = float(difficulty.star_rating)
        hit_window = difficulty.great_hit_window or get_great_hit_window(
            difficulty.overall_difficulty, mods)

        hit_count = int(difficulty.max_combo)
        if hit_count == 0: # avoid division by 0
            hit_count = 1500

        misses = score.count_miss
        usercombo = hit_count - misses
        acc = score.accuracy * 100

        strain_value = math.pow(max(1, stars/0.0075) * 5 - 4, 2)/100000
        length_bonus = min(1, hit_count/1500) * 0.1 + 1
        strain_value *= length_bonus
        strain_value *= math.pow(0.985, misses)
        strain_value *= min(math.pow(max(0, usercombo), 0.5) / math.pow(hit_count, 0.5), 1)
        strain_value *= acc/100

        acc_value = 0.0
        if hit_window > 0:
            acc_value = math.pow(150/hit_window, 1.1) * math.pow(acc/100, 15) * 22
            acc_value *= min(math.pow(hit_count/1500, 0.3), 1.15)

        mod_multiplier = 1.10
        if mods.has('HD'):
            mod_multiplier *= 1.10
            strain_value *= 1.025
        if mods.has('NF'):
            mod_multiplier *= 0.90
        if mods.has('FL'):
            strain_value *= 1.05 * length_bonus

        total_value = math.pow(math.pow(strain_value, 1.1) +
            math.pow(acc_value, 1.1), 1.0/1.1) * mod_multiplier

        return TaikoPerformanceAttributes(
            mods=mods,
            total_performance=total_value,
            strain_performance=strain_value,
            accuracy_performance=acc_value)


class TaikoRuleset(Ruleset):
    id = GameMode.TAIKO
    name = 'taiko'
    short_name = 'taiko'

    valid_mods = ('NF', 'EZ', 'HD', 'HR', 'SD', 'DT', 'RX', 'HT', 'NC', 'FL',
        'AT', 'PF', 'CN', 'V2')

    legacy_counts = {
        'count_300': HitResult.GREAT,
        'count_100': HitResult.OK,
        'count_50': HitResult.MEH,
        'count_miss': HitResult.MISS,
    }

    rank_table = RATIO_RANK_TABLE

    difficulty_calculator_class = TaikoDifficultyCalculator
    performance_calculator_class = TaikoPerformanceCalculator
    difficulty_attributes_class = TaikoDifficultyAttributes

    hit_statistics_generator = staticmethod(generate_taiko_hit_statistics)

    def calculate_accuracy(self, statistics):
        total_hits = self.calculate_total_hits(statistics)
        if total_hits <= 0:
            return 1.0

        count_300 = self.get_legacy_count(statistics, 'count_300')
        count_100 = self.get_legacy_count(statistics, 'count_100')

        return max(0.0, (count_100 / 2 + count_300) / total_hits)

    def rank_values(self, score_info):
        return hit_ratio_rank_values(score_info)
