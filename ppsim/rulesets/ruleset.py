import logging

import numpy as np

from ppsim.core.combo import estimate_combo
from ppsim.core.hit_statistics import get_valid_hit_statistics, normalize_accuracy
from ppsim.enums import GameMode, HitResult, ScoreRank
from ppsim.errors import BeatmapConversionError
from .mods import ModCombination

logger = logging.getLogger(__name__)

LEGACY_COUNT_NAMES = ('count_geki', 'count_300', 'count_katu',
    'count_100', 'count_50', 'count_miss')

SILVER_RANKS = {
    ScoreRank.X: ScoreRank.XH,
    ScoreRank.S: ScoreRank.SH,
}

# osu!standard and taiko grade on the share of 300s, not on accuracy
RATIO_RANK_TABLE = (
    (ScoreRank.X, lambda v: v['ratio_300'] == 1),
    (ScoreRank.S, lambda v: v['ratio_300'] > 0.9 and v['ratio_50'] <= 0.01
        and v['count_miss'] == 0),
    (ScoreRank.A, lambda v: (v['ratio_300'] > 0.8 and v['count_miss'] == 0)
        or v['ratio_300'] > 0.9),
    (ScoreRank.B, lambda v: (v['ratio_300'] > 0.7 and v['count_miss'] == 0)
        or v['ratio_300'] > 0.8),
    (ScoreRank.C, lambda v: v['ratio_300'] > 0.6),
)


def hit_ratio_rank_values(score_info):
    total_hits = score_info.total_hits
    count_300 = score_info.count_300
    count_50 = score_info.count_50

    # single precision like the game client
    ratio_300 = np.float32(count_300 / total_hits) if total_hits > 0 else np.float32(0)
    ratio_50 = np.float32(count_50 / total_hits) if total_hits > 0 else np.float32(0)

    return {
        'ratio_300': float(ratio_300),
        'ratio_50': float(ratio_50),
        'count_miss': score_info.count_miss,
    }


class DifficultyCalculator(object):
    def __init__(self, beatmap, ruleset):
        self.beatmap = beatmap
        self.ruleset = ruleset

    def calculate(self, mods=None, total_hits=None):
        """Difficulty of the beatmap, or of its first ``total_hits`` objects.

        Without ``mods`` the mods already applied to the beatmap are used.
        """
        beatmap = self.beatmap
        if mods is not None:
            beatmap = self.ruleset.apply_to_beatmap_with_mods(beatmap, mods)
        return self._calculate(beatmap, total_hits)

    def _calculate(self, beatmap, total_hits=None):
        raise NotImplementedError

    def get_skills(self):
        return []


class PerformanceCalculator(object):
    def __init__(self, ruleset, difficulty, score_info):
        self.ruleset = ruleset
        self.difficulty = difficulty
        self.score_info = score_info

    def calculate(self):
        return self.calculate_attributes().total_performance

    def calculate_attributes(self):
        raise NotImplementedError


class Ruleset(object):
    """A game mode.

    Builds mod combinations and difficulty/performance calculators, and holds
    the per-mode scoring rules: hit statistics generation, accuracy, rank
    tables and the mapping between legacy counts and hit results.
    """

    id = GameMode.OSU
    name = ''
    short_name = ''

    valid_mods = ()
    mod_multipliers = {'EZ': 0.5, 'NF': 0.5, 'HT': 0.3}
    scales_circle_size = False

    # legacy count name -> hit result
    legacy_counts = {}
    # legacy counts that make up total hits
    total_hit_counts = ('count_300', 'count_100', 'count_50', 'count_miss')

    # (rank, condition) checked top-down, first match wins
    rank_table = ()

    difficulty_calculator_class = DifficultyCalculator
    performance_calculator_class = PerformanceCalculator
    difficulty_attributes_class = None

    def create_mod_combination(self, mods=None):
        return ModCombination(mods, self.id, self.valid_mods, self.mod_multipliers)

    def create_difficulty_attributes(self, mods=None):
        return self.difficulty_attributes_class(mods=self.create_mod_combination(mods))

    def create_difficulty_calculator(self, beatmap):
        return self.difficulty_calculator_class(beatmap, self)

    def create_performance_calculator(self, difficulty, score_info):
        return self.performance_calculator_class(self, difficulty, score_info)

    def apply_to_beatmap_with_mods(self, beatmap, mods=None):
        """Returns a copy of the beatmap converted to this ruleset with HR/EZ
        applied to its stats and the clock rate set by the mods."""
        mods = self.create_mod_combination(mods)

        if beatmap.original_mode not in (self.id, GameMode.OSU):
            raise BeatmapConversionError('Can not convert a {} beatmap to {}'.format(
                GameMode(beatmap.original_mode).name.lower(), self.name))

        converted = beatmap.copy()
        converted.mode = GameMode(self.id)
        converted.mods = mods

        difficulty = converted.base_difficulty.copy()
        self.apply_difficulty_mods(difficulty, mods)
        difficulty.clock_rate = mods.clock_rate
        converted.difficulty = difficulty
        return converted

    def apply_difficulty_mods(self, difficulty, mods):
        if mods.has('HR'):
            if self.scales_circle_size:
                difficulty.circle_size = min(difficulty.circle_size * 1.3, 10)
            difficulty.approach_rate = min(difficulty.approach_rate * 1.4, 10)
            difficulty.overall_difficulty = min(difficulty.overall_difficulty * 1.4, 10)
            difficulty.drain_rate = min(difficulty.drain_rate * 1.4, 10)
        elif mods.has('EZ'):
            if self.scales_circle_size:
                difficulty.circle_size *= 0.5
            difficulty.approach_rate *= 0.5
            difficulty.overall_difficulty *= 0.5
            difficulty.drain_rate *= 0.5

    # scoring rules

    @staticmethod
    def hit_statistics_generator(attributes, accuracy=1, count_miss=0,
        count_50=None, count_100=None):
        raise NotImplementedError

    def generate_hit_statistics(self, attributes, accuracy=None, count_miss=None,
        count_50=None, count_100=None):
        return self.hit_statistics_generator(attributes, normalize_accuracy(accuracy),
            count_miss or 0, count_50, count_100)

    def fix_hit_statistics(self, statistics, total_hits):
        """Turns every miss of a breakdown into a 300."""
        statistics = get_valid_hit_statistics(statistics)
        statistics[HitResult.GREAT] = (total_hits - statistics[HitResult.OK]
            - statistics[HitResult.MEH])
        statistics[HitResult.MISS] = 0
        return statistics

    def estimate_combo(self, beatmap_max_combo, count_miss=0, max_combo=None,
        percent_combo=None):
        return estimate_combo(beatmap_max_combo, count_miss, max_combo, percent_combo)

    def get_legacy_count(self, statistics, name):
        hit_result = self.legacy_counts.get(name)
        if hit_result is None:
            return 0
        return statistics.get(hit_result) or 0

    def set_legacy_count(self, statistics, name, value):
        hit_result = self.legacy_counts.get(name)
        if hit_result is not None:
            statistics[hit_result] = int(value or 0)

    def calculate_total_hits(self, statistics):
        return sum(self.get_legacy_count(statistics, name) for name in self.total_hit_counts)

    def count_passed_objects(self, statistics):
        """Objects a score got through, for partial difficulty."""
        return self.calculate_total_hits(statistics)

    def calculate_accuracy(self, statistics):
        raise NotImplementedError

    def rank_values(self, score_info):
        return {'accuracy': score_info.accuracy}

    def calculate_rank(self, score_info):
        if not score_info.passed:
            return ScoreRank.F

        values = self.rank_values(score_info)
        rank = ScoreRank.D
        for table_rank, condition in self.rank_table:
            if condition(values):
                rank = table_rank
                break

        mods = score_info.mods
        if rank in SILVER_RANKS and mods is not None and (mods.has('HD') or mods.has('FL')):
            rank = SILVER_RANKS[rank]
        return rank

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, int(self.id))
