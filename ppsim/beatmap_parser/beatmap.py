import copy

from ppsim.enums import GameMode


class BeatmapDifficulty(object):
    def __init__(self, drain_rate=5.0, circle_size=5.0, overall_difficulty=5.0,
        approach_rate=None, slider_multiplier=1.4, slider_tick_rate=1.0, clock_rate=1.0):
        self.drain_rate = drain_rate
        self.circle_size = circle_size
        self.overall_difficulty = overall_difficulty
        # old maps have no AR line and use OD instead
        self.approach_rate = overall_difficulty if approach_rate is None else approach_rate
        self.slider_multiplier = slider_multiplier
        self.slider_tick_rate = slider_tick_rate
        self.clock_rate = clock_rate

    def copy(self):
        return copy.copy(self)

    def __repr__(self):
        return ('BeatmapDifficulty(cs={}, ar={}, od={}, hp={}, rate={})'.format(
            self.circle_size, self.approach_rate, self.overall_difficulty,
            self.drain_rate, self.clock_rate))


class Beatmap(object):
    """A decoded .osu file.

    Object counts and nested catch counts are computed once by the parser;
    ``mode`` changes when a ruleset converts the map, ``original_mode`` keeps
    the mode stored in the file.
    """

    def __init__(self):
        self.format_version = 14
        self.mode = GameMode.OSU
        self.original_mode = GameMode.OSU
        self.metadata = {
            "title": "",
            "artist": "",
            "creator": "",
            "version": "",
            "beatmap_id": 0,
            "beatmapset_id": 0
        }
        self.difficulty = BeatmapDifficulty()
        self.base_difficulty = BeatmapDifficulty()
        self.mods = None

        self.timing_points = []
        self.hit_objects = []

        self.circles = 0
        self.sliders = 0
        self.spinners = 0
        self.holds = 0

        self.fruits = 0
        self.droplets = 0
        self.tiny_droplets = 0
        self.std_max_combo = 0

        self.bpm_min = 0
        self.bpm_max = 0
        self.bpm_mode = 0

        self.raw = ''

    @property
    def beatmap_id(self):
        return self.metadata["beatmap_id"]

    @property
    def is_convert(self):
        return self.mode != self.original_mode

    @property
    def total_hits(self):
        if self.mode == GameMode.TAIKO:
            return self.circles
        if self.mode == GameMode.FRUITS:
            return self.max_fruits + self.max_droplets + self.max_tiny_droplets
        if self.mode == GameMode.MANIA:
            return self.mania_notes
        return self.circles + self.sliders + self.spinners

    @property
    def max_combo(self):
        if self.mode == GameMode.TAIKO:
            return self.circles
        if self.mode == GameMode.FRUITS:
            return self.max_fruits + self.max_droplets
        if self.mode == GameMode.MANIA:
            return self.mania_notes
        return self.std_max_combo

    @property
    def mania_notes(self):
        if self.original_mode == GameMode.MANIA:
            return self.circles + self.holds
        # converted sliders and spinners become one hold note each
        return self.circles + self.sliders + self.spinners

    # catch counts, every slider contributes nested objects
    @property
    def max_fruits(self):
        return self.circles + self.fruits

    @property
    def max_droplets(self):
        return self.droplets

    @property
    def max_tiny_droplets(self):
        return self.tiny_droplets

    @property
    def start_time(self):
        if not self.hit_objects:
            return 0
        return self.hit_objects[0]["start_time"]

    @property
    def end_time(self):
        if not self.hit_objects:
            return 0
        return max(obj.get("end_time", obj["start_time"]) for obj in self.hit_objects)

    @property
    def length(self):
        return self.end_time - self.start_time

    def copy(self):
        beatmap = copy.copy(self)
        beatmap.metadata = dict(self.metadata)
        beatmap.difficulty = self.difficulty.copy()
        beatmap.base_difficulty = self.base_difficulty.copy()
        return beatmap

    def __str__(self):
        return "{} - {} [{}] ({})".format(self.metadata["artist"],
            self.metadata["title"], self.metadata["version"], self.metadata["creator"])
