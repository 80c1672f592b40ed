"""Options for the beatmap and score calculators.

Every field is optional. Unknown keyword arguments are rejected so a typo
does not silently fall back to a default.
"""


class Options(object):
    fields = {}

    def __init__(self, **kwargs):
        for name, default in self.fields.items():
            value = kwargs.pop(name, default)
            if isinstance(value, (list, dict)):
                value = type(value)(value)
            setattr(self, name, value)

        if kwargs:
            raise TypeError('Unknown {} fields: {}'.format(
                self.__class__.__name__, ', '.join(sorted(kwargs))))

    @classmethod
    def from_value(cls, value=None, **kwargs):
        if value is None:
            return cls(**kwargs)
        if isinstance(value, cls):
            return value
        return cls(**dict(value, **kwargs))

    def __repr__(self):
        values = ', '.join('{}={!r}'.format(name, getattr(self, name))
            for name in self.fields if getattr(self, name) is not None)
        return '{}({})'.format(self.__class__.__name__, values)


class BeatmapCustomStats(Options):
    fields = {
        'approach_rate': None,
        'overall_difficulty': None,
        'circle_size': None,
        'clock_rate': None,
        'bpm': None,
        # locked values are what the player sees after mods
        'lock_stats': False,
        'lock_approach_rate': False,
        'lock_overall_difficulty': False,
        'lock_circle_size': False,
    }

    def has_custom_stats(self):
        return any(getattr(self, name) is not None for name in
            ('approach_rate', 'overall_difficulty', 'circle_size', 'clock_rate', 'bpm'))


SOURCE_FIELDS = {
    'beatmap_id': None,
    'file_url': None,
    'save_path': None,
    'hash': None,
}

RULESET_FIELDS = {
    'ruleset_id': None,
    'mods': None,
    'attributes': None,
    'difficulty': None,
}

STAT_FIELDS = dict(BeatmapCustomStats.fields)


class BeatmapCalculationOptions(Options):
    fields = dict(SOURCE_FIELDS, **RULESET_FIELDS)
    fields.update({
        'beatmap_info': None,
        'total_hits': None,
        'strains': False,
        # None uses the configured defaults
        'accuracy': None,
        'total_scores': None,
    })
    fields.update(STAT_FIELDS)


class ScoreCalculationOptions(Options):
    fields = dict(SOURCE_FIELDS, **RULESET_FIELDS)
    fields.update({
        'replay_url': None,
        'replay_hash': None,
        'score_info': None,
        # turn misses into hits and recompute at full combo
        'fix': False,
        'count_miss': None,
        'count_50': None,
        'count_100': None,
        'accuracy': None,
        'total_score': None,
        'max_combo': None,
        'percent_combo': None,
    })
    fields.update(STAT_FIELDS)


def get_custom_stats(options):
    return BeatmapCustomStats(**{name: getattr(options, name) for name in STAT_FIELDS})
