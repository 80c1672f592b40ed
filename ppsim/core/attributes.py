from ppsim.enums import GameMode
from ppsim.utils import time_mod


class BeatmapAttributes(object):
    """Everything score simulation needs to know about a beatmap.

    Derived once from a parsed beatmap or handed in by a caller as a cache
    shortcut. Counts are non-negative integers. ``mods`` keeps the raw form
    the attributes were created with (string or bitwise).
    """

    count_fields = ('total_hits', 'max_combo', 'max_fruits', 'max_droplets',
        'max_tiny_droplets')

    def __init__(self, beatmap_id=0, hash=None, ruleset_id=GameMode.OSU, mods='NM',
        total_hits=0, max_combo=0, max_fruits=0, max_droplets=0, max_tiny_droplets=0):
        self.beatmap_id = int(beatmap_id or 0)
        self.hash = hash
        self.ruleset_id = int(ruleset_id)
        self.mods = mods
        self.total_hits = total_hits
        self.max_combo = max_combo
        self.max_fruits = max_fruits
        self.max_droplets = max_droplets
        self.max_tiny_droplets = max_tiny_droplets

        for field in self.count_fields:
            value = int(getattr(self, field) or 0)
            if value < 0:
                raise ValueError('{} must not be negative, got {}'.format(field, value))
            setattr(self, field, value)

    @classmethod
    def from_dict(cls, data):
        if isinstance(data, cls):
            return data
        keys = ('beatmap_id', 'hash', 'ruleset_id', 'mods') + cls.count_fields
        return cls(**{key: data[key] for key in keys if key in data})

    def to_dict(self):
        return {
            'beatmap_id': self.beatmap_id,
            'hash': self.hash,
            'ruleset_id': self.ruleset_id,
            'mods': str(self.mods),
            'total_hits': self.total_hits,
            'max_combo': self.max_combo,
            'max_fruits': self.max_fruits,
            'max_droplets': self.max_droplets,
            'max_tiny_droplets': self.max_tiny_droplets
        }

    def __repr__(self):
        return 'BeatmapAttributes({})'.format(self.to_dict())


class DifficultyAttributes(object):
    """Base difficulty record, rulesets add their own fields."""

    def __init__(self, mods=None, star_rating=0.0, max_combo=0):
        self.mods = mods
        self.star_rating = star_rating
        self.max_combo = max_combo

    def to_dict(self):
        data = dict(vars(self))
        data['mods'] = str(self.mods)
        return data

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, self.to_dict())


class PerformanceAttributes(object):
    def __init__(self, mods=None, total_performance=0.0):
        self.mods = mods
        self.total_performance = total_performance

    def to_dict(self):
        data = dict(vars(self))
        data['mods'] = str(self.mods)
        return data

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, self.to_dict())


def create_beatmap_attributes(beatmap, hash=None):
    """Summarizes a beatmap that already has its ruleset and mods applied."""
    catch = beatmap.mode == GameMode.FRUITS

    return BeatmapAttributes(
        beatmap_id=beatmap.beatmap_id,
        hash=hash,
        ruleset_id=beatmap.mode,
        mods=str(beatmap.mods) if beatmap.mods is not None else 'NM',
        total_hits=beatmap.total_hits,
        max_combo=beatmap.max_combo,
        max_fruits=beatmap.max_fruits if catch else 0,
        max_droplets=beatmap.max_droplets if catch else 0,
        max_tiny_droplets=beatmap.max_tiny_droplets if catch else 0)


def create_beatmap_info(beatmap, hash=None):
    difficulty = beatmap.difficulty
    clock_rate = difficulty.clock_rate
    length, bpm_mode = time_mod(beatmap.length, beatmap.bpm_mode, clock_rate)

    return {
        "beatmap_id": beatmap.beatmap_id,
        "beatmapset_id": beatmap.metadata["beatmapset_id"],
        "title": beatmap.metadata["title"],
        "artist": beatmap.metadata["artist"],
        "creator": beatmap.metadata["creator"],
        "version": beatmap.metadata["version"],
        "circles": beatmap.circles,
        "sliders": beatmap.sliders,
        "spinners": beatmap.spinners,
        "holds": beatmap.holds,
        "length": length / 1000,
        "bpm_min": beatmap.bpm_min * clock_rate,
        "bpm_max": beatmap.bpm_max * clock_rate,
        "bpm_mode": bpm_mode,
        "circle_size": difficulty.circle_size,
        "approach_rate": difficulty.approach_rate,
        "overall_difficulty": difficulty.overall_difficulty,
        "drain_rate": difficulty.drain_rate,
        "clock_rate": clock_rate,
        "ruleset_id": int(beatmap.mode),
        "mods": str(beatmap.mods) if beatmap.mods is not None else 'NM',
        "max_combo": beatmap.max_combo,
        "is_convert": beatmap.is_convert,
        "hash": hash
    }
