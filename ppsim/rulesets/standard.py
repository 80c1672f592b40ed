import io
import logging
import math

import pyttanko

from ppsim.core.attributes import DifficultyAttributes, PerformanceAttributes
from ppsim.core.hit_statistics import generate_osu_hit_statistics
from ppsim.core.stats import (approach_rate_to_ms, ms_to_approach_rate,
    ms_to_overall_difficulty, overall_difficulty_to_ms)
from ppsim.enums import GameMode, HitResult
from .ruleset import (DifficultyCalculator, PerformanceCalculator, Ruleset,
    RATIO_RANK_TABLE, hit_ratio_rank_values)

logger = logging.getLogger(__name__)

SECTION_LENGTH = 400

# mods pyttanko still needs once stats and clock rate are applied to the map
PERFORMANCE_MODS = (pyttanko.MODS_HD | pyttanko.MODS_FL | pyttanko.MODS_NF |
    pyttanko.MODS_SO | pyttanko.MODS_TD)


class StandardDifficultyAttributes(DifficultyAttributes):
    def __init__(self, mods=None, star_rating=0.0, max_combo=0, aim_strain=0.0,
        speed_strain=0.0, approach_rate=0.0, overall_difficulty=0.0, drain_rate=0.0,
        hit_circle_count=0, slider_count=0, spinner_count=0, clock_rate=1.0):
        super().__init__(mods, star_rating, max_combo)
        self.aim_strain = aim_strain
        self.speed_strain = speed_strain
        self.approach_rate = approach_rate
        self.overall_difficulty = overall_difficulty
        self.drain_rate = drain_rate
        self.hit_circle_count = hit_circle_count
        self.slider_count = slider_count
        self.spinner_count = spinner_count
        self.clock_rate = clock_rate


class StandardPerformanceAttributes(PerformanceAttributes):
    def __init__(self, mods=None, total_performance=0.0, aim_performance=0.0,
        speed_performance=0.0, accuracy_performance=0.0):
        super().__init__(mods, total_performance)
        self.aim_performance = aim_performance
        self.speed_performance = speed_performance
        self.accuracy_performance = accuracy_performance


class StandardDifficultyCalculator(DifficultyCalculator):
    def __init__(self, beatmap, ruleset):
        super().__init__(beatmap, ruleset)
        self._bmap = None

    # Load the decoded text into pyttanko with our own stats and clock rate
    # @param  {Beatmap} beatmap
    # @param  {Integer} total_hits  only keep the first N objects
    # @return pyttanko beatmap
    def _load_map(self, beatmap, total_hits=None):
        bmap = pyttanko.parser().map(io.StringIO(beatmap.raw))

        difficulty = beatmap.difficulty
        bmap.cs = difficulty.circle_size
        bmap.ar = difficulty.approach_rate
        bmap.od = difficulty.overall_difficulty
        bmap.hp = difficulty.drain_rate

        if total_hits is not None:
            bmap.hitobjects = bmap.hitobjects[:max(0, int(total_hits))]
            bmap.ncircles = len([obj for obj in bmap.hitobjects
                if obj.objtype & pyttanko.OBJ_CIRCLE])
            bmap.nsliders = len([obj for obj in bmap.hitobjects
                if obj.objtype & pyttanko.OBJ_SLIDER])
            bmap.nspinners = len([obj for obj in bmap.hitobjects
                if obj.objtype & pyttanko.OBJ_SPINNER])

        clock_rate = difficulty.clock_rate or 1
        if clock_rate != 1:
            for obj in bmap.hitobjects:
                obj.time /= clock_rate
            for timing_point in bmap.timing_points:
                timing_point.time /= clock_rate

        return bmap

    def _calculate(self, beatmap, total_hits=None):
        difficulty = beatmap.difficulty
        clock_rate = difficulty.clock_rate or 1
        mods = beatmap.mods if beatmap.mods is not None else self.ruleset.create_mod_combination()

        bmap = self._load_map(beatmap, total_hits)
        self._bmap = bmap

        attributes = StandardDifficultyAttributes(
            mods=mods,
            approach_rate=ms_to_approach_rate(
                approach_rate_to_ms(difficulty.approach_rate) / clock_rate),
            overall_difficulty=ms_to_overall_difficulty(
                overall_difficulty_to_ms(difficulty.overall_difficulty) / clock_rate),
            drain_rate=difficulty.drain_rate,
            hit_circle_count=bmap.ncircles,
            slider_count=bmap.nsliders,
            spinner_count=bmap.nspinners,
            clock_rate=clock_rate)

        if not bmap.hitobjects:
            logger.debug('No hit objects to calculate for {}'.format(beatmap.beatmap_id))
            return attributes

        stars = pyttanko.diff_calc().calc(bmap, mods=mods.bitwise & pyttanko.MODS_TD)

        attributes.star_rating = float(stars.total)
        attributes.aim_strain = float(stars.aim)
        attributes.speed_strain = float(stars.speed)
        attributes.max_combo = bmap.max_combo()
        return attributes

    # Strain peaks per 400ms section of the last calculation
    # @return {List} [{'title': 'Aim', 'strain_peaks': [...]}, ...]
    def get_skills(self):
        if self._bmap is None or not self._bmap.hitobjects:
            return []

        hitobjects = self._bmap.hitobjects
        skills = []
        for title, strain_type in (('Aim', pyttanko.DIFF_AIM), ('Speed', pyttanko.DIFF_SPEED)):
            first_section = int(math.floor(hitobjects[0].time / SECTION_LENGTH))
            peaks = {}
            for obj in hitobjects:
                section = int(math.floor(obj.time / SECTION_LENGTH)) - first_section
                peaks[section] = max(peaks.get(section, 0.0), obj.strains[strain_type])

            last_section = max(peaks) if peaks else -1
            skills.append({
                'title': title,
                'strain_peaks': [peaks.get(i, 0.0) for i in range(last_section + 1)]
            })
        return skills


class StandardPerformanceCalculator(PerformanceCalculator):
    def calculate_attributes(self):
        difficulty = self.difficulty
        score = self.score_info
        mods = score.mods if score.mods is not None else difficulty.mods

        total_objects = (difficulty.hit_circle_count + difficulty.slider_count +
            difficulty.spinner_count)

        pp, aim, speed, acc, _ = pyttanko.ppv2(
            aim_stars=difficulty.aim_strain,
            speed_stars=difficulty.speed_strain,
            max_combo=difficulty.max_combo,
            nsliders=difficulty.slider_count,
            ncircles=difficulty.hit_circle_count,
            nobjects=total_objects,
            base_ar=difficulty.approach_rate,
            base_od=difficulty.overall_difficulty,
            mods=mods.bitwise & PERFORMANCE_MODS,
            combo=score.max_combo,
            n300=score.count_300,
            n100=score.count_100,
            n50=score.count_50,
            nmiss=score.count_miss)

        return StandardPerformanceAttributes(
            mods=mods,
            total_performance=float(pp),
            aim_performance=float(aim),
            speed_performance=float(speed),
            accuracy_performance=float(acc))


class StandardRuleset(Ruleset):
    id = GameMode.OSU
    name = 'osu'
    short_name = 'osu'

    valid_mods = ('NF', 'EZ', 'TD', 'HD', 'HR', 'SD', 'DT', 'RX', 'HT', 'NC', 'FL',
        'AT', 'SO', 'AP', 'PF', 'CN', 'TP', 'V2', 'MR')
    scales_circle_size = True

    legacy_counts = {
        'count_300': HitResult.GREAT,
        'count_100': HitResult.OK,
        'count_50': HitResult.MEH,
        'count_miss': HitResult.MISS,
    }

    rank_table = RATIO_RANK_TABLE

    difficulty_calculator_class = StandardDifficultyCalculator
    performance_calculator_class = StandardPerformanceCalculator
    difficulty_attributes_class = StandardDifficultyAttributes

    hit_statistics_generator = staticmethod(generate_osu_hit_statistics)

    def calculate_accuracy(self, statistics):
        total_hits = self.calculate_total_hits(statistics)
        if total_hits <= 0:
            return 1.0

        count_300 = self.get_legacy_count(statistics, 'count_300')
        count_100 = self.get_legacy_count(statistics, 'count_100')
        count_50 = self.get_legacy_count(statistics, 'count_50')

        return max(0.0, (count_50 / 6 + count_100 / 3 + count_300) / total_hits)

    def rank_values(self, score_info):
        return hit_ratio_rank_values(score_info)
