import logging

from ppsim.config import load_config
from ppsim.core.attributes import (BeatmapAttributes, create_beatmap_attributes,
    create_beatmap_info)
from ppsim.core.difficulty import (calculate_difficulty, calculate_performance,
    to_difficulty_attributes)
from ppsim.core.downloading import Downloader
from ppsim.core.parsing import parse_beatmap
from ppsim.core.score_simulator import ScoreSimulator
from ppsim.core.scoring import scale_total_score
from ppsim.core.stats import apply_custom_circle_size, apply_custom_stats
from ppsim.enums import GameMode
from ppsim.rulesets.registry import get_ruleset_by_id, to_ruleset_id
from .options import BeatmapCalculationOptions, get_custom_stats

logger = logging.getLogger(__name__)


# Download, decode and convert a beatmap with mods and custom stats applied
# @param  {Downloader} downloader
# @param  {Options}    options    beatmap source fields
# @param  {Integer}    ruleset_id  None keeps the beatmap's own mode
# @return {Tuple}      (Beatmap, md5, Ruleset)
async def load_beatmap(downloader, options, ruleset_id=None, mods=None, stats=None):
    parsed, md5 = await parse_beatmap(downloader, beatmap_id=options.beatmap_id,
        file_url=options.file_url, hash=options.hash, save_path=options.save_path)

    if ruleset_id is None:
        ruleset_id = parsed.mode
    ruleset = get_ruleset_by_id(ruleset_id)
    mods = ruleset.create_mod_combination(mods)

    beatmap = parsed.copy()
    apply_custom_circle_size(beatmap, mods, stats)
    beatmap = ruleset.apply_to_beatmap_with_mods(beatmap, mods)
    apply_custom_stats(beatmap, mods, stats)

    logger.debug('Loaded {} as {} {}'.format(beatmap, ruleset.name, mods))
    return beatmap, md5, ruleset


class BeatmapCalculator(object):
    """Beatmap info, attributes, difficulty and pp for a set of simulated scores."""

    def __init__(self, downloader=None, config=None, simulator=None):
        self.config = config or load_config()
        self.downloader = downloader or Downloader.from_config(self.config)
        self.simulator = simulator or ScoreSimulator()

    async def calculate(self, options=None, **kwargs):
        options = BeatmapCalculationOptions.from_value(options, **kwargs)
        stats = get_custom_stats(options)
        ruleset_id = to_ruleset_id(options.ruleset_id)

        if self.is_precalculated(options, stats):
            attributes = BeatmapAttributes.from_dict(options.attributes)
            ruleset = get_ruleset_by_id(attributes.ruleset_id)
            difficulty = to_difficulty_attributes(options.difficulty, ruleset,
                attributes.mods)

            logger.debug('Using precalculated beatmap {}'.format(attributes.beatmap_id))
            return {
                'beatmap_info': options.beatmap_info,
                'attributes': attributes,
                'skills': None,
                'difficulty': difficulty,
                'performance': self.simulate_scores(ruleset, attributes, difficulty,
                    options),
            }

        beatmap, md5, ruleset = await load_beatmap(self.downloader, options,
            ruleset_id, options.mods, stats)

        beatmap_info = create_beatmap_info(beatmap, md5)
        attributes = create_beatmap_attributes(beatmap, md5)

        calculator = ruleset.create_difficulty_calculator(beatmap)
        skills = None

        is_partial = (options.total_hits is not None and
            int(options.total_hits) < attributes.total_hits)

        if (options.difficulty is not None and not options.strains and
            not stats.has_custom_stats() and not is_partial):
            difficulty = to_difficulty_attributes(options.difficulty, ruleset,
                beatmap.mods)
        else:
            difficulty = calculate_difficulty(calculator=calculator,
                total_hits=options.total_hits)
            if options.strains:
                skills = calculator.get_skills()

        return {
            'beatmap_info': beatmap_info,
            'attributes': attributes,
            'skills': skills,
            'difficulty': difficulty,
            'performance': self.simulate_scores(ruleset, attributes, difficulty, options),
        }

    def is_precalculated(self, options, stats):
        if options.beatmap_info is None or options.attributes is None:
            return False
        if options.difficulty is None or options.strains:
            return False
        if stats.has_custom_stats():
            return False

        if options.total_hits is not None:
            attributes = BeatmapAttributes.from_dict(options.attributes)
            return int(options.total_hits) == attributes.total_hits
        return True

    def simulate_scores(self, ruleset, attributes, difficulty, options):
        """Performance of the default simulated scores.

        Mania is simulated by total score, every other mode by accuracy.
        """
        simulation = self.config.get('simulation', {})
        performance = []

        if ruleset.id == GameMode.MANIA:
            mods = ruleset.create_mod_combination(attributes.mods)
            total_scores = options.total_scores or simulation.get('total_scores', [])
            for total_score in total_scores:
                score = self.simulator.simulate(attributes,
                    total_score=int(scale_total_score(total_score, mods)))
                performance.append(calculate_performance(difficulty, score, ruleset))
            return performance

        accuracy = options.accuracy or simulation.get('accuracy', [])
        for acc in accuracy:
            score = self.simulator.simulate(attributes, accuracy=acc)
            performance.append(calculate_performance(difficulty, score, ruleset))
        return performance
