import math

from ppsim.core.attributes import DifficultyAttributes, PerformanceAttributes
from ppsim.core.hit_statistics import (generate_catch_hit_statistics,
    get_valid_hit_statistics)
from ppsim.core.stats import approach_rate_to_ms, ms_to_approach_rate
from ppsim.enums import GameMode, HitResult, ScoreRank
from .rosu_difficulty import RosuDifficultyCalculator
from .ruleset import PerformanceCalculator, Ruleset


class CatchDifficultyAttributes(DifficultyAttributes):
    def __init__(self, mods=None, star_rating=0.0, max_combo=0, approach_rate=5.0):
        super().__init__(mods, star_rating, max_combo)
        self.approach_rate = approach_rate


class CatchDifficultyCalculator(RosuDifficultyCalculator):
    def _create_attributes(self, beatmap, mods, result):
        clock_rate = beatmap.difficulty.clock_rate or 1
        return CatchDifficultyAttributes(
            mods=mods,
            star_rating=result.stars,
            max_combo=result.max_combo,
            approach_rate=ms_to_approach_rate(
                approach_rate_to_ms(beatmap.difficulty.approach_rate) / clock_rate))


class CatchPerformanceCalculator(PerformanceCalculator):
    def calculate_attributes(self):
        difficulty = self.difficulty
        score = self.score_info
        mods = score.mods if score.mods is not None else difficulty.mods

        stars = float(difficulty.star_rating)
        max_combo = int(difficulty.max_combo)
        if max_combo <= 0:
            return PerformanceAttributes(mods=mods, total_performance=0.0)

        ar = float(difficulty.approach_rate)
        combo = score.max_combo
        misses = score.count_miss
        acc = score.accuracy * 100

        # Conversion from Star rating to pp
        final = math.pow(max(0, (5*stars/0.0049)-4), 2)/100000
        # Length Bonus
        lengthbonus = (0.95 + 0.3 * min(1.0, max_combo / 2500.0))
        if max_combo > 2500:
            lengthbonus += math.log10(max_combo / 2500.0) * 0.475
        final *= lengthbonus
        # Miss Penalty
        final *= math.pow(0.97, misses)
        # Not FC combo penalty
        final *= math.pow(min(combo, max_combo)/max_combo, 0.8)
        # AR Bonus
        ar_bonus = 1
        if ar > 9:
            ar_bonus += 0.1 * (ar - 9.0)
        if ar > 10:
            ar_bonus += 0.1 * (ar - 10.0)
        if ar < 8:
            ar_bonus += 0.025 * (8.0 - ar)
        final *= ar_bonus
        # Hidden bonus
        if ar > 10:
            hidden_bonus = 1.01 + 0.04 * (11 - min(11, ar))
        else:
            hidden_bonus = 1.05 + 0.075 * (10 - ar)
        # Acc Penalty
        final *= math.pow(acc/100, 5.5)

        # mod bonuses
        if mods.has('HD'):
            final *= hidden_bonus
        if mods.has('FL'):
            final *= 1.35

        return PerformanceAttributes(mods=mods, total_performance=final)


class CatchRuleset(Ruleset):
    id = GameMode.FRUITS
    name = 'fruits'
    short_name = 'fruits'

    valid_mods = ('NF', 'EZ', 'HD', 'HR', 'SD', 'DT', 'RX', 'HT', 'NC', 'FL',
        'AT', 'PF', 'CN', 'V2')
    scales_circle_size = True

    legacy_counts = {
        'count_300': HitResult.GREAT,
        'count_100': HitResult.LARGE_TICK_HIT,
        'count_50': HitResult.SMALL_TICK_HIT,
        'count_katu': HitResult.SMALL_TICK_MISS,
        'count_miss': HitResult.MISS,
    }
    total_hit_counts = ('count_300', 'count_100', 'count_50', 'count_miss', 'count_katu')

    rank_table = (
        (ScoreRank.X, lambda v: v['accuracy'] == 1),
        (ScoreRank.S, lambda v: v['accuracy'] > 0.98),
        (ScoreRank.A, lambda v: v['accuracy'] > 0.94),
        (ScoreRank.B, lambda v: v['accuracy'] > 0.90),
        (ScoreRank.C, lambda v: v['accuracy'] > 0.85),
    )

    difficulty_calculator_class = CatchDifficultyCalculator
    performance_calculator_class = CatchPerformanceCalculator
    difficulty_attributes_class = CatchDifficultyAttributes

    hit_statistics_generator = staticmethod(generate_catch_hit_statistics)

    def fix_hit_statistics(self, statistics, total_hits):
        """Missed fruits become caught fruits, missed droplets caught droplets."""
        statistics = get_valid_hit_statistics(statistics)
        statistics[HitResult.GREAT] = (total_hits
            - statistics[HitResult.LARGE_TICK_HIT]
            - statistics[HitResult.SMALL_TICK_HIT]
            - statistics[HitResult.SMALL_TICK_MISS]
            - statistics[HitResult.MISS])
        statistics[HitResult.LARGE_TICK_HIT] += statistics[HitResult.MISS]
        statistics[HitResult.MISS] = 0
        return statistics

    def count_passed_objects(self, statistics):
        # tiny droplets aren't objects of their own
        return sum(self.get_legacy_count(statistics, name)
            for name in ('count_300', 'count_100', 'count_miss'))

    def calculate_accuracy(self, statistics):
        total_hits = self.calculate_total_hits(statistics)
        if total_hits <= 0:
            return 1.0

        count_300 = self.get_legacy_count(statistics, 'count_300')
        count_100 = self.get_legacy_count(statistics, 'count_100')
        count_50 = self.get_legacy_count(statistics, 'count_50')

        return max(0.0, (count_50 + count_100 + count_300) / total_hits)
