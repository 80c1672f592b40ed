import datetime
import logging

from ppsim.enums import GameMode, HitResult
from ppsim.rulesets.registry import get_ruleset_by_id
from .score_info import ScoreInfo
from .scoring import scale_total_score

logger = logging.getLogger(__name__)

MAX_TOTAL_SCORE = 1000000


class ScoreSimulator(object):
    """Builds plausible scores from a beatmap's attributes.

    Holds no state, one instance can be shared between calculations.
    """

    # Score for a target accuracy, miss count, hit counts and combo
    # @param  {BeatmapAttributes} attributes
    # @param  {Float}   accuracy        0-1, or 0-100
    # @param  {Integer} max_combo       absolute combo
    # @param  {Float}   percent_combo   combo as 0-100 of the beatmap max combo
    # @param  {Integer} total_score     mania only
    # @return {ScoreInfo}
    def simulate(self, attributes, accuracy=None, count_miss=None, count_50=None,
        count_100=None, max_combo=None, percent_combo=None, total_score=None,
        username=None, date=None):
        ruleset = get_ruleset_by_id(attributes.ruleset_id)

        statistics = ruleset.generate_hit_statistics(attributes, accuracy,
            count_miss, count_50, count_100)

        combo, perfect = ruleset.estimate_combo(attributes.max_combo,
            statistics[HitResult.MISS], max_combo, percent_combo)

        return self._generate_score_info(attributes, statistics, combo, perfect,
            total_score=total_score, username=username, date=date)

    def simulate_fc(self, score_info, attributes):
        """Same score without its misses, at full combo."""
        ruleset = get_ruleset_by_id(attributes.ruleset_id)

        if ruleset.id == GameMode.MANIA:
            return self.simulate_max(attributes, mods=score_info.mods)

        statistics = ruleset.fix_hit_statistics(score_info.statistics,
            attributes.total_hits)

        score = self._generate_score_info(attributes, statistics,
            attributes.max_combo, True,
            total_score=score_info.total_score,
            username=score_info.username,
            date=score_info.date,
            mods=score_info.mods)

        score.id = score_info.id
        score.user_id = score_info.user_id
        score.beatmap_hash_md5 = score_info.beatmap_hash_md5 or attributes.hash
        return score

    def simulate_max(self, attributes, mods=None):
        ruleset = get_ruleset_by_id(attributes.ruleset_id)

        statistics = ruleset.generate_hit_statistics(attributes, 1, 0)

        total_score = None
        if ruleset.id == GameMode.MANIA:
            total_score = MAX_TOTAL_SCORE

        return self._generate_score_info(attributes, statistics,
            attributes.max_combo, True, total_score=total_score, mods=mods)

    def complete_replay(self, score_info, attributes):
        """Fills what a replay does not know about the beatmap.

        Hit counts are what was recorded and are carried over untouched, only
        re-keyed when the beatmap's ruleset differs from the replay's.
        """
        ruleset = get_ruleset_by_id(attributes.ruleset_id)

        score = ScoreInfo(
            id=score_info.id,
            beatmap_id=attributes.beatmap_id,
            user_id=score_info.user_id,
            username=score_info.username,
            ruleset_id=ruleset.id,
            mods=ruleset.create_mod_combination(attributes.mods),
            max_combo=score_info.max_combo,
            total_score=score_info.total_score,
            beatmap_hash_md5=score_info.beatmap_hash_md5,
            date=score_info.date,
            life_bar=score_info.life_bar)

        for name in ('count_geki', 'count_300', 'count_katu', 'count_100',
            'count_50', 'count_miss'):
            setattr(score, name, getattr(score_info, name))

        # a replay that stops before the last object is a fail
        score.passed = score.total_hits >= attributes.total_hits
        score.perfect = score.max_combo >= attributes.max_combo
        score.accuracy = ruleset.calculate_accuracy(score.statistics)
        score.rank = ruleset.calculate_rank(score)
        return score

    # alias kept for callers using the replay wording
    simulate_replay = complete_replay

    def _generate_score_info(self, attributes, statistics, max_combo, perfect,
        total_score=None, username=None, date=None, mods=None):
        ruleset = get_ruleset_by_id(attributes.ruleset_id)
        mods = ruleset.create_mod_combination(
            attributes.mods if mods is None else mods)

        if ruleset.id == GameMode.MANIA and not total_score:
            total_score = int(scale_total_score(MAX_TOTAL_SCORE, mods))

        score = ScoreInfo(
            beatmap_id=attributes.beatmap_id,
            username=username or 'osu!',
            ruleset_id=ruleset.id,
            mods=mods,
            statistics=statistics,
            max_combo=max_combo,
            total_score=total_score or 0,
            perfect=perfect,
            beatmap_hash_md5=attributes.hash,
            date=date or datetime.datetime.now(datetime.timezone.utc))

        score.passed = score.total_hits >= attributes.total_hits
        score.accuracy = ruleset.calculate_accuracy(score.statistics)
        score.rank = ruleset.calculate_rank(score)
        return score
