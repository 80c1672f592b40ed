import logging

from osrparse import Replay

from ppsim.core.score_info import ScoreInfo

logger = logging.getLogger(__name__)


def parse_replay_data(data):
    """Decodes raw .osr bytes into a ScoreInfo."""
    replay = Replay.from_string(data)
    return score_info_from_replay(replay)


def score_info_from_replay(replay):
    life_bar = []
    for state in replay.life_bar_graph or []:
        life_bar.append((state.time, state.life))

    score = ScoreInfo(
        id=replay.replay_id or None,
        username=replay.username,
        ruleset_id=int(replay.mode),
        mods=int(replay.mods),
        max_combo=replay.max_combo,
        total_score=replay.score,
        perfect=bool(replay.perfect),
        beatmap_hash_md5=replay.beatmap_hash,
        date=replay.timestamp,
        life_bar=life_bar)

    score.count_geki = replay.count_geki
    score.count_300 = replay.count_300
    score.count_katu = replay.count_katu
    score.count_100 = replay.count_100
    score.count_50 = replay.count_50
    score.count_miss = replay.count_miss

    score.accuracy = score.ruleset.calculate_accuracy(score.statistics)
    score.rank = score.ruleset.calculate_rank(score)

    logger.debug('Replay by {} on {}: {}'.format(score.username,
        score.beatmap_hash_md5, score))
    return score
