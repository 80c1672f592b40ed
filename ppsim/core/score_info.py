import datetime

from ppsim.enums import ScoreRank
from ppsim.rulesets.mods import ModCombination
from ppsim.rulesets.registry import get_ruleset_by_id
from .hit_statistics import get_valid_hit_statistics

SCORE_FIELDS = ('id', 'beatmap_id', 'user_id', 'username', 'ruleset_id', 'mods',
    'statistics', 'max_combo', 'total_score', 'passed', 'perfect',
    'beatmap_hash_md5', 'date', 'pp', 'life_bar')


def _legacy_count(name):
    def getter(self):
        return self.ruleset.get_legacy_count(self.statistics, name)

    def setter(self, value):
        self.ruleset.set_legacy_count(self.statistics, name, value)

    return property(getter, setter)


class ScoreInfo(object):
    """A score, real or simulated.

    ``statistics`` maps hit result kinds to counts. The legacy ``count_*``
    properties read and write it through the ruleset's mapping, so a breakdown
    keeps its meaning when it moves between rulesets.
    """

    def __init__(self, id=None, beatmap_id=0, user_id=None, username='osu!',
        ruleset_id=0, mods=None, statistics=None, max_combo=0, total_score=0,
        accuracy=1.0, passed=True, perfect=False, rank=ScoreRank.X,
        beatmap_hash_md5=None, date=None, pp=None, life_bar=None):
        self.id = id
        self.beatmap_id = int(beatmap_id or 0)
        self.user_id = user_id
        self.username = username or 'osu!'
        self.ruleset_id = int(ruleset_id)
        self.statistics = get_valid_hit_statistics(statistics)
        self.max_combo = int(max_combo or 0)
        self.total_score = int(total_score or 0)
        self.accuracy = accuracy
        self.passed = passed
        self.perfect = perfect
        self.rank = ScoreRank(str(rank)) if rank is not None else ScoreRank.F
        self.beatmap_hash_md5 = beatmap_hash_md5
        self.date = date or datetime.datetime.now(datetime.timezone.utc)
        self.pp = pp
        self.life_bar = life_bar or []

        if isinstance(mods, ModCombination) and mods.ruleset_id == self.ruleset_id:
            self.mods = mods
        else:
            self.mods = self.ruleset.create_mod_combination(mods)

    @property
    def ruleset(self):
        return get_ruleset_by_id(self.ruleset_id)

    count_geki = _legacy_count('count_geki')
    count_300 = _legacy_count('count_300')
    count_katu = _legacy_count('count_katu')
    count_100 = _legacy_count('count_100')
    count_50 = _legacy_count('count_50')
    count_miss = _legacy_count('count_miss')

    @property
    def total_hits(self):
        return self.ruleset.calculate_total_hits(self.statistics)

    def copy(self):
        score = ScoreInfo(**self.to_dict(raw=True))
        return score

    def to_dict(self, raw=False):
        data = {
            'id': self.id,
            'beatmap_id': self.beatmap_id,
            'user_id': self.user_id,
            'username': self.username,
            'ruleset_id': self.ruleset_id,
            'mods': self.mods if raw else str(self.mods),
            'statistics': dict(self.statistics),
            'max_combo': self.max_combo,
            'total_score': self.total_score,
            'accuracy': self.accuracy,
            'passed': self.passed,
            'perfect': self.perfect,
            'rank': self.rank if raw else str(self.rank),
            'beatmap_hash_md5': self.beatmap_hash_md5,
            'date': self.date if raw or isinstance(self.date, str) else self.date.isoformat(),
            'pp': self.pp,
            'life_bar': list(self.life_bar),
        }
        return data

    def __repr__(self):
        return '<ScoreInfo {} {} {:.2%} {}x {}>'.format(self.ruleset_id,
            str(self.mods), self.accuracy, self.max_combo, str(self.rank))


def to_score_info(data):
    """Builds a ScoreInfo from a dict, trusting an existing instance.

    Missing accuracy and rank are derived from the statistics, ``passed``
    defaults to True and legacy ``count_*`` keys are accepted.
    """
    if isinstance(data, ScoreInfo):
        return data

    data = dict(data)
    legacy = {name: data.pop(name) for name in
        ('count_geki', 'count_300', 'count_katu', 'count_100', 'count_50', 'count_miss')
        if name in data}
    accuracy = data.pop('accuracy', None)
    rank = data.pop('rank', None)
    if 'mode' in data and 'ruleset_id' not in data:
        data['ruleset_id'] = data.pop('mode')

    score = ScoreInfo(**{key: value for key, value in data.items()
        if key in SCORE_FIELDS})
    for name, value in legacy.items():
        setattr(score, name, value)

    score.accuracy = accuracy if accuracy is not None else \
        score.ruleset.calculate_accuracy(score.statistics)
    score.rank = ScoreRank(str(rank)) if rank is not None else \
        score.ruleset.calculate_rank(score)
    return score
