from enum import Enum, IntEnum


class GameMode(IntEnum):
    OSU = 0
    TAIKO = 1
    FRUITS = 2
    MANIA = 3


class ScoreRank(str, Enum):
    F = 'F'
    D = 'D'
    C = 'C'
    B = 'B'
    A = 'A'
    S = 'S'
    SH = 'SH'
    X = 'X'
    XH = 'XH'

    def __str__(self):
        return self.value


class HitResult(object):
    PERFECT = 'perfect'
    GREAT = 'great'
    GOOD = 'good'
    OK = 'ok'
    MEH = 'meh'
    MISS = 'miss'
    LARGE_TICK_HIT = 'large_tick_hit'
    SMALL_TICK_HIT = 'small_tick_hit'
    SMALL_TICK_MISS = 'small_tick_miss'

    ALL = (PERFECT, GREAT, GOOD, OK, MEH, MISS,
        LARGE_TICK_HIT, SMALL_TICK_HIT, SMALL_TICK_MISS)
