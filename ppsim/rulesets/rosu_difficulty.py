import logging

import rosu_pp_py as rosu

from ppsim.enums import GameMode
from ppsim.errors import BeatmapConversionError, CalculationError
from .ruleset import DifficultyCalculator

logger = logging.getLogger(__name__)

ROSU_MODES = {
    GameMode.OSU: rosu.GameMode.Osu,
    GameMode.TAIKO: rosu.GameMode.Taiko,
    GameMode.FRUITS: rosu.GameMode.Catch,
    GameMode.MANIA: rosu.GameMode.Mania,
}


class RosuDifficultyCalculator(DifficultyCalculator):
    """Star rating through rosu-pp for the modes pyttanko doesn't cover.

    The stats already on the beatmap (HR/EZ and custom values) are passed as
    final values so rosu-pp doesn't scale them a second time.
    """

    # Decode the beatmap text and convert it to the ruleset's mode
    # @param  {Beatmap} beatmap
    # @return rosu beatmap
    def _load_map(self, beatmap):
        try:
            bmap = rosu.Beatmap(content=beatmap.raw)
        except rosu.ParseError as e:
            raise CalculationError('Could not decode beatmap {}: {}'.format(
                beatmap.beatmap_id, e))

        if beatmap.is_convert:
            try:
                bmap.convert(ROSU_MODES[GameMode(beatmap.mode)], beatmap.mods.bitwise)
            except rosu.ConvertError as e:
                raise BeatmapConversionError(str(e))
        return bmap

    def _difficulty(self, beatmap, total_hits=None):
        difficulty = beatmap.difficulty
        mods = beatmap.mods if beatmap.mods is not None else self.ruleset.create_mod_combination()

        kwargs = dict(
            mods=mods.bitwise,
            clock_rate=difficulty.clock_rate or 1,
            ar=difficulty.approach_rate, ar_with_mods=True,
            cs=difficulty.circle_size, cs_with_mods=True,
            od=difficulty.overall_difficulty, od_with_mods=True,
            hp=difficulty.drain_rate, hp_with_mods=True,
            lazer=False)
        if total_hits is not None:
            kwargs['passed_objects'] = max(0, int(total_hits))

        bmap = self._load_map(beatmap)
        result = rosu.Difficulty(**kwargs).calculate(bmap)
        logger.debug('{} stars for {} {}'.format(result.stars, beatmap.beatmap_id, mods))
        return result

    def _calculate(self, beatmap, total_hits=None):
        mods = beatmap.mods if beatmap.mods is not None else self.ruleset.create_mod_combination()
        return self._create_attributes(beatmap, mods, self._difficulty(beatmap, total_hits))

    def _create_attributes(self, beatmap, mods, result):
        raise NotImplementedError
