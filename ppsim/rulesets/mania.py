from ppsim.core.attributes import DifficultyAttributes, PerformanceAttributes
from ppsim.core.hit_statistics import generate_mania_hit_statistics
from ppsim.enums import GameMode, HitResult, ScoreRank
from ppsim.utils import clamp
from .rosu_difficulty import RosuDifficultyCalculator
from .ruleset import PerformanceCalculator, Ruleset


def get_great_hit_window(overall_difficulty):
    return 34 + 3 * clamp(10 - overall_difficulty, 0, 10)


class ManiaDifficultyAttributes(DifficultyAttributes):
    def __init__(self, mods=None, star_rating=0.0, max_combo=0,
        great_hit_window=0.0, overall_difficulty=5.0):
        super().__init__(mods, star_rating, max_combo)
        self.great_hit_window = great_hit_window
        self.overall_difficulty = overall_difficulty


class ManiaPerformanceAttributes(PerformanceAttributes):
    def __init__(self, mods=None, total_performance=0.0, strain_performance=0.0,
        accuracy_performance=0.0):
        super().__init__(mods, total_performance)
        self.strain_performance = strain_performance
        self.accuracy_performance = accuracy_performance


class ManiaDifficultyCalculator(RosuDifficultyCalculator):
    def _create_attributes(self, beatmap, mods, result):
        # one entry per note, hold notes included
        return ManiaDifficultyAttributes(
            mods=mods,
            star_rating=result.stars,
            max_combo=result.n_objects,
            great_hit_window=get_great_hit_window(beatmap.difficulty.overall_difficulty),
            overall_difficulty=beatmap.difficulty.overall_difficulty)


class ManiaPerformanceCalculator(PerformanceCalculator):
    def calculate_attributes(self):
        difficulty = self.difficulty
        score = self.score_info
        mods = score.mods if score.mods is not None else difficulty.mods

        stars = float(difficulty.star_rating)
        objects_count = int(difficulty.max_combo)
        hit300_window = difficulty.great_hit_window or get_great_hit_window(
            difficulty.overall_difficulty)

        # score needed for a given pp doesn't change with EZ, NF and HT
        score_multiplier = mods.score_multiplier or 1
        real_score = (score.total_score or 0) / score_multiplier

        strain_value = (5 * max(1, stars / 0.2) - 4) ** 2.2 / 135 * \
            (1 + 0.1 * min(1, objects_count / 1500))
        if real_score <= 500000:
            strain_value = 0
        elif real_score <= 600000:
            strain_value *= (real_score - 500000) / 100000 * 0.3
        elif real_score <= 700000:
            strain_value *= 0.3 + (real_score - 600000) / 100000 * 0.25
        elif real_score <= 800000:
            strain_value *= 0.55 + (real_score - 700000) / 100000 * 0.20
        elif real_score <= 900000:
            strain_value *= 0.75 + (real_score - 800000) / 100000 * 0.15
        else:
            strain_value *= 0.9 + (real_score - 900000) / 100000 * 0.1

        acc_value = max(0, 0.2 - ((hit300_window - 34) * 0.006667)) * strain_value * \
            (max(0, real_score - 960000) / 40000) ** 1.1

        pp_multiplier = 0.8
        if mods.has('NF'):
            pp_multiplier *= 0.9
        if mods.has('EZ'):
            pp_multiplier *= 0.5

        total_value = (strain_value ** 1.1 + acc_value ** 1.1) ** (1 / 1.1) * pp_multiplier
        total_value *= score.accuracy

        return ManiaPerformanceAttributes(
            mods=mods,
            total_performance=total_value,
            strain_performance=strain_value,
            accuracy_performance=acc_value)


class ManiaRuleset(Ruleset):
    id = GameMode.MANIA
    name = 'mania'
    short_name = 'mania'

    valid_mods = ('NF', 'EZ', 'HD', 'HR', 'SD', 'DT', 'HT', 'NC', 'FL', 'AT', 'PF',
        '4K', '5K', '6K', '7K', '8K', '9K', '1K', '2K', '3K', 'FI', 'RD', 'CN',
        'CP', 'V2', 'MR')
    mod_multipliers = {'EZ': 0.5, 'NF': 0.5, 'HT': 0.5}

    legacy_counts = {
        'count_geki': HitResult.PERFECT,
        'count_300': HitResult.GREAT,
        'count_katu': HitResult.GOOD,
        'count_100': HitResult.OK,
        'count_50': HitResult.MEH,
        'count_miss': HitResult.MISS,
    }
    total_hit_counts = ('count_geki', 'count_300', 'count_katu', 'count_100',
        'count_50', 'count_miss')

    rank_table = (
        (ScoreRank.X, lambda v: v['accuracy'] == 1),
        (ScoreRank.S, lambda v: v['accuracy'] > 0.95),
        (ScoreRank.A, lambda v: v['accuracy'] > 0.9),
        (ScoreRank.B, lambda v: v['accuracy'] > 0.8),
        (ScoreRank.C, lambda v: v['accuracy'] > 0.7),
    )

    difficulty_calculator_class = ManiaDifficultyCalculator
    performance_calculator_class = ManiaPerformanceCalculator
    difficulty_attributes_class = ManiaDifficultyAttributes

    hit_statistics_generator = staticmethod(generate_mania_hit_statistics)

    def calculate_accuracy(self, statistics):
        total_hits = self.calculate_total_hits(statistics)
        if total_hits <= 0:
            return 1.0

        count_geki = self.get_legacy_count(statistics, 'count_geki')
        count_300 = self.get_legacy_count(statistics, 'count_300')
        count_katu = self.get_legacy_count(statistics, 'count_katu')
        count_100 = self.get_legacy_count(statistics, 'count_100')
        count_50 = self.get_legacy_count(statistics, 'count_50')

        return max(0.0, (count_50 / 6 + count_100 / 3 + count_katu / 1.5 +
            count_300 + count_geki) / total_hits)
