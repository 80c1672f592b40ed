import logging

from ppsim.config import load_config
from ppsim.core.attributes import BeatmapAttributes, create_beatmap_attributes
from ppsim.core.difficulty import (calculate_difficulty, calculate_performance,
    to_difficulty_attributes)
from ppsim.core.downloading import Downloader
from ppsim.core.parsing import parse_score
from ppsim.core.score_info import ScoreInfo, to_score_info
from ppsim.core.score_simulator import ScoreSimulator
from ppsim.errors import HashMismatchError
from ppsim.rulesets.registry import get_ruleset_by_id, to_ruleset_id
from .beatmap_calculator import load_beatmap
from .options import ScoreCalculationOptions, get_custom_stats

logger = logging.getLogger(__name__)


class ScoreCalculator(object):
    """Difficulty and pp of one score.

    The score comes from a replay, a given score record or a simulation, and
    the beatmap is only downloaded when the given attributes and difficulty
    are not enough.
    """

    def __init__(self, downloader=None, config=None, simulator=None):
        self.config = config or load_config()
        self.downloader = downloader or Downloader.from_config(self.config)
        self.simulator = simulator or ScoreSimulator()

    async def calculate(self, options=None, **kwargs):
        options = ScoreCalculationOptions.from_value(options, **kwargs)
        stats = get_custom_stats(options)
        ruleset_id = to_ruleset_id(options.ruleset_id)
        mods = options.mods

        replay_score = None
        if options.replay_url:
            replay_score, _ = await parse_score(self.downloader,
                replay_url=options.replay_url, hash=options.replay_hash,
                save_path=options.save_path)
            if mods is None:
                mods = replay_score.mods
            if ruleset_id is None:
                ruleset_id = replay_score.ruleset_id

        given_score = None
        if options.score_info is not None:
            given_score = to_score_info(options.score_info)
            if mods is None and (isinstance(options.score_info, ScoreInfo) or
                options.score_info.get('mods') is not None):
                mods = given_score.mods

        beatmap = None
        beatmap_md5 = None

        attributes = None
        if options.attributes is not None:
            attributes = BeatmapAttributes.from_dict(options.attributes)
            if mods is not None:
                attributes = BeatmapAttributes.from_dict(dict(attributes.to_dict(),
                    mods=str(get_ruleset_by_id(attributes.ruleset_id)
                        .create_mod_combination(mods))))
        else:
            beatmap, beatmap_md5, ruleset = await load_beatmap(self.downloader,
                options, ruleset_id, mods, stats)
            attributes = create_beatmap_attributes(beatmap, beatmap_md5)

        ruleset = get_ruleset_by_id(attributes.ruleset_id)

        if replay_score is not None:
            score = self.simulator.complete_replay(replay_score, attributes)
        elif given_score is not None:
            score = given_score
        else:
            score = self.simulator.simulate(attributes,
                accuracy=options.accuracy,
                count_miss=options.count_miss,
                count_50=options.count_50,
                count_100=options.count_100,
                max_combo=options.max_combo,
                percent_combo=options.percent_combo,
                total_score=options.total_score)

        if options.fix:
            score = self.simulator.simulate_fc(score, attributes)

        is_partial = score.total_hits < attributes.total_hits

        use_given = (options.difficulty is not None and not stats.has_custom_stats()
            and not is_partial)

        if use_given:
            difficulty = to_difficulty_attributes(options.difficulty, ruleset,
                attributes.mods)
        else:
            if beatmap is None:
                beatmap, beatmap_md5, ruleset = await load_beatmap(self.downloader,
                    options, ruleset.id, attributes.mods, stats)

            total_hits = ruleset.count_passed_objects(score.statistics) if is_partial else None
            if is_partial:
                logger.info('Partial score: {} of {} hits'.format(
                    score.total_hits, attributes.total_hits))
            difficulty = calculate_difficulty(beatmap, ruleset, total_hits=total_hits)

        beatmap_md5 = beatmap_md5 or attributes.hash
        if beatmap_md5:
            if score.beatmap_hash_md5 and score.beatmap_hash_md5 != beatmap_md5:
                logger.warning('Score {} is not set on {}'.format(
                    score.beatmap_hash_md5, beatmap_md5))
                raise HashMismatchError('Beatmap & replay mismatch!')
            score.beatmap_hash_md5 = beatmap_md5

        performance = calculate_performance(difficulty, score, ruleset)
        score.pp = performance.total_performance

        return {
            'score_info': score,
            'difficulty': difficulty,
            'performance': performance,
        }
