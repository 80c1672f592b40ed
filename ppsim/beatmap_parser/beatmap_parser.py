import bisect
import codecs
import logging
import math
import os
import re

from ppsim.enums import GameMode
from ppsim.utils import clamp
from . import juice_stream
from .beatmap import Beatmap, BeatmapDifficulty

logger = logging.getLogger(__name__)


class BeatmapParser():
    def __init__(self):

        self.osu_section = None
        self.format_version = 14
        self.properties = {}

        self.timing_points = []
        self.hit_objects = []
        self._timing_offsets = []
        self._uninherited = []
        self._uninherited_offsets = []

        self.timing_lines = []
        self.object_lines = []
        self.section_reg = re.compile(r'^\[([a-zA-Z0-9]+)\]$')
        self.key_val_reg = re.compile(r'^([a-zA-Z0-9]+)[ ]*:[ ]*(.*)$')
        self.version_reg = re.compile(r'^osu file format v([0-9]+)$')

    # Get the beat length of the uninherited timing point affecting an offset
    # @param  {Float} offset
    # @return {Float} beat length in ms
    def get_beat_length(self, offset):
        if not self._uninherited:
            return 1000.0
        idx = bisect.bisect_right(self._uninherited_offsets, offset) - 1
        return self._uninherited[max(idx, 0)]["beat_length"]

    # Get the slider velocity multiplier at an offset, red lines reset it to 1
    # @param  {Float} offset
    # @return {Float} velocity multiplier
    def get_slider_velocity(self, offset):
        idx = bisect.bisect_right(self._timing_offsets, offset) - 1
        if idx < 0:
            return 1.0
        return self.timing_points[idx]["velocity"]

    # Parse a timing line
    # @param  {String} line
    def parse_timing_point(self, line):
        members = line.split(',')

        beat_length = float(members[1])
        if len(members) > 6 and members[6].strip():
            uninherited = members[6].strip()[0] == '1'
        else:
            uninherited = beat_length > 0

        timing_point = {
            "offset": float(members[0]),
            "beat_length": beat_length,
            "uninherited": uninherited,
            "velocity": 1.0
        }

        if not math.isnan(beat_length) and beat_length != 0:
            if uninherited and beat_length > 0:
                # If positive, beat_length is the length of a beat in milliseconds
                timing_point["bpm"] = 60000 / beat_length
            elif beat_length < 0:
                # If negative, beat_length is a velocity factor
                timing_point["velocity"] = clamp(-100 / beat_length, 0.1, 10)

        self.timing_points.append(timing_point)

    # Parse an object line
    # @param  {String} line
    def parse_hit_object(self, line):
        members = line.split(',')

        object_type = int(members[3])

        hit_object = {
            "start_time": float(members[2]),
            "new_combo": bool(object_type & 4),
            "position": [
                float(members[0]),
                float(members[1])
            ]
        }

        # object type is a bitwise flag enum
        # 1: circle
        # 2: slider
        # 8: spinner
        # 128: mania hold note
        if object_type & 1:
            hit_object["object_name"] = 'circle'
        elif object_type & 8:
            hit_object["object_name"] = 'spinner'
            hit_object["end_time"] = float(members[5])
        elif object_type & 2:
            hit_object["object_name"] = 'slider'
            hit_object["curve_type"] = members[5][0] if members[5] else 'L'
            hit_object["repeat_count"] = max(1, int(members[6]))
            hit_object["pixel_length"] = float(members[7]) if len(members) > 7 else 0.0
        elif object_type & 128:
            hit_object["object_name"] = 'hold'
            hit_object["end_time"] = float(members[5].split(':')[0])
        else:
            # Unknown
            logger.debug('Unknown hit object type {} at {}'.format(
                object_type, hit_object["start_time"]))
            hit_object["object_name"] = 'unknown'

        self.hit_objects.append(hit_object)

    # Slider duration, osu!standard combo and catch nested objects
    # @param  {Object} hit_object
    # @param  {BeatmapDifficulty} difficulty
    # @return {Integer} combo given by the slider in osu!standard
    def compute_slider(self, hit_object, difficulty):
        start_time = hit_object["start_time"]
        repeats = hit_object["repeat_count"]
        distance = hit_object["pixel_length"]
        beat_length = self.get_beat_length(start_time)
        velocity = self.get_slider_velocity(start_time)

        px_per_beat = difficulty.slider_multiplier * 100 * velocity
        if px_per_beat > 0:
            beats_number = (distance * repeats) / px_per_beat
            hit_object["duration"] = beats_number * beat_length
        else:
            hit_object["duration"] = 0
        hit_object["end_time"] = start_time + hit_object["duration"]

        hit_object["nested"] = juice_stream.slider_nested_counts(hit_object,
            beat_length, velocity, difficulty, self.format_version)

        if self.format_version < 8:
            px_per_beat /= velocity
        if px_per_beat <= 0:
            return repeats + 1

        num_beats = (distance * repeats) / px_per_beat
        ticks = int(math.ceil((num_beats - 0.1) / repeats * difficulty.slider_tick_rate))
        ticks -= 1
        ticks *= repeats
        ticks += repeats + 1
        return max(0, ticks)

    # Minimum, maximum and most common BPM, weighted by the time each red line lasts
    def compute_bpm(self, beatmap):
        red_lines = [point for point in self._uninherited if "bpm" in point]
        if not red_lines:
            return

        bpms = [point["bpm"] for point in red_lines]
        beatmap.bpm_min = min(bpms)
        beatmap.bpm_max = max(bpms)

        last_time = beatmap.end_time
        durations = {}
        for i, point in enumerate(red_lines):
            if point["offset"] > last_time:
                continue
            next_offset = red_lines[i + 1]["offset"] if i + 1 < len(red_lines) else last_time
            start = 0 if i == 0 else point["offset"]
            durations[point["bpm"]] = durations.get(point["bpm"], 0) + max(0, next_offset - start)

        if durations:
            beatmap.bpm_mode = max(durations, key=lambda bpm: durations[bpm])
        else:
            beatmap.bpm_mode = red_lines[0]["bpm"]

    # Read a single line, parse when key/value, store when further parsing needed
    # @param  {String} line
    def read_line(self, line: str):
        line = line.strip()
        if not line or line.startswith('//'):
            return

        match = self.section_reg.match(line)
        if match:
            self.osu_section = match.group(1).lower()
            return

        if self.osu_section == 'timingpoints':
            self.timing_lines.append(line)
        elif self.osu_section == 'hitobjects':
            self.object_lines.append(line)
        elif self.osu_section in ('events', 'colours'):
            return
        else:
            match = self.version_reg.match(line)
            if match:
                self.format_version = int(match.group(1))
                return

            # Apart from events, timingpoints and hitobjects sections, lines are "key: value"
            match = self.key_val_reg.match(line)
            if match:
                self.properties[match.group(1)] = match.group(2).strip()

    def _float(self, key, default):
        try:
            return float(self.properties[key])
        except (KeyError, ValueError):
            return default

    # Compute everything that require the file to be completely parsed and return the beatmap
    # @return {Beatmap} beatmap
    def build_beatmap(self, raw=''):
        beatmap = Beatmap()
        beatmap.raw = raw
        beatmap.format_version = self.format_version

        mode = GameMode(int(self._float("Mode", 0)))
        beatmap.mode = mode
        beatmap.original_mode = mode

        beatmap.metadata.update({
            "title": self.properties.get("Title", ""),
            "artist": self.properties.get("Artist", ""),
            "creator": self.properties.get("Creator", ""),
            "version": self.properties.get("Version", ""),
            "beatmap_id": int(self._float("BeatmapID", 0)),
            "beatmapset_id": int(self._float("BeatmapSetID", 0))
        })

        od = self._float("OverallDifficulty", 5.0)
        difficulty = BeatmapDifficulty(
            drain_rate=self._float("HPDrainRate", 5.0),
            circle_size=self._float("CircleSize", 5.0),
            overall_difficulty=od,
            approach_rate=self._float("ApproachRate", od),
            slider_multiplier=self._float("SliderMultiplier", 1.4),
            slider_tick_rate=self._float("SliderTickRate", 1.0))
        beatmap.difficulty = difficulty
        beatmap.base_difficulty = difficulty.copy()

        for timing_line in self.timing_lines:
            self.parse_timing_point(timing_line)
        self.timing_points.sort(key=lambda a: (a["offset"], not a["uninherited"]))
        self._timing_offsets = [point["offset"] for point in self.timing_points]
        self._uninherited = [point for point in self.timing_points
            if point["uninherited"] and point["beat_length"] > 0]
        self._uninherited_offsets = [point["offset"] for point in self._uninherited]

        for object_line in self.object_lines:
            self.parse_hit_object(object_line)
        self.hit_objects.sort(key=lambda a: a["start_time"])

        std_max_combo = 0
        for hit_object in self.hit_objects:
            object_name = hit_object["object_name"]
            if object_name == 'circle':
                beatmap.circles += 1
                std_max_combo += 1
            elif object_name == 'spinner':
                beatmap.spinners += 1
                std_max_combo += 1
            elif object_name == 'hold':
                beatmap.holds += 1
            elif object_name == 'slider':
                beatmap.sliders += 1
                std_max_combo += self.compute_slider(hit_object, difficulty)
                fruits, droplets, tiny_droplets = hit_object["nested"]
                beatmap.fruits += fruits
                beatmap.droplets += droplets
                beatmap.tiny_droplets += tiny_droplets

        beatmap.std_max_combo = std_max_combo
        beatmap.timing_points = self.timing_points
        beatmap.hit_objects = self.hit_objects
        self.compute_bpm(beatmap)
        return beatmap

    # Parse .osu content
    # @param  {String} text
    def parse_string(self, text):
        for line in text.splitlines():
            self.read_line(line)
        return self.build_beatmap(raw=text)

    def parse_bytes(self, data):
        return self.parse_string(data.decode('utf-8-sig', errors='replace'))

    # Parse a .osu file
    # @param  {String}   file  path to the file
    def parse_file(self, file):
        if not os.path.isfile(file):
            raise FileNotFoundError(file)

        with codecs.open(file, 'r', encoding="utf-8-sig") as f:
            return self.parse_string(f.read())


def parse_beatmap_data(data):
    """Decodes raw .osu bytes or text into a Beatmap."""
    parser = BeatmapParser()
    if isinstance(data, bytes):
        return parser.parse_bytes(data)
    return parser.parse_string(data)
