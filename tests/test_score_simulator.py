"""Tests for ppsim.core.score_simulator -- simulated, fixed and replay scores."""

import datetime

import pytest

from ppsim.core.score_info import ScoreInfo
from ppsim.core.score_simulator import ScoreSimulator
from ppsim.core.scoring import calculate_accuracy
from ppsim.enums import GameMode, HitResult, ScoreRank

from conftest import make_attributes, make_catch_attributes


@pytest.fixture
def simulator():
    return ScoreSimulator()


ALL_ATTRIBUTES = [
    make_attributes(0, total_hits=500, max_combo=600),
    make_attributes(1, total_hits=400, max_combo=400),
    make_catch_attributes(),
    make_attributes(3, total_hits=900, max_combo=900),
]


def test_simulate_defaults(simulator):
    score = simulator.simulate(make_attributes(total_hits=500, max_combo=600))
    assert score.count_300 == 500
    assert score.max_combo == 600
    assert score.perfect
    assert score.passed
    assert score.accuracy == 1
    assert score.rank == ScoreRank.X
    assert score.username == 'osu!'
    assert score.date.tzinfo is not None


def test_simulate_with_misses(simulator):
    score = simulator.simulate(make_attributes(total_hits=500, max_combo=600),
        accuracy=95, count_miss=5)
    assert score.count_miss == 5
    assert score.max_combo == 595
    assert not score.perfect
    assert score.rank == ScoreRank.A


def test_simulate_uses_attribute_mods(simulator):
    score = simulator.simulate(make_attributes(mods='HDDT'))
    assert str(score.mods) == 'HDDT'
    assert score.rank == ScoreRank.XH


@pytest.mark.parametrize("attributes", ALL_ATTRIBUTES)
@pytest.mark.parametrize("accuracy", [0.8, 0.93, 0.99, 1])
def test_simulated_accuracy_matches_statistics(simulator, attributes, accuracy):
    score = simulator.simulate(attributes, accuracy=accuracy, count_miss=2)
    assert calculate_accuracy(score) == pytest.approx(score.accuracy)


def test_simulate_mania_total_score(simulator):
    score = simulator.simulate(make_attributes(3, total_hits=900, max_combo=900, mods='EZ'))
    assert score.total_score == 500000
    assert score.statistics[HitResult.PERFECT] == 900

    score = simulator.simulate(make_attributes(3, total_hits=900, max_combo=900),
        total_score=812345)
    assert score.total_score == 812345


def test_simulate_fc_turns_misses_into_300s(simulator):
    attributes = make_attributes(total_hits=500, max_combo=600)
    choked = simulator.simulate(attributes, count_miss=5, count_100=20, count_50=2,
        max_combo=200)
    choked.id = 42

    fixed = simulator.simulate_fc(choked, attributes)
    assert fixed.count_miss == 0
    assert fixed.count_300 == 478
    assert fixed.count_100 == 20
    assert fixed.count_50 == 2
    assert fixed.perfect
    assert fixed.max_combo == 600
    assert fixed.id == 42
    assert fixed.accuracy == pytest.approx(calculate_accuracy(fixed))
    assert choked.count_miss == 5


def test_simulate_fc_catch_misses_become_droplets(simulator):
    attributes = make_catch_attributes(3, 2, 21)
    score = ScoreInfo(ruleset_id=2, statistics={
        HitResult.GREAT: 2,
        HitResult.LARGE_TICK_HIT: 2,
        HitResult.SMALL_TICK_HIT: 20,
        HitResult.SMALL_TICK_MISS: 1,
        HitResult.MISS: 1,
    })
    fixed = simulator.simulate_fc(score, attributes)
    assert fixed.statistics[HitResult.GREAT] == 2
    assert fixed.statistics[HitResult.LARGE_TICK_HIT] == 3
    assert fixed.statistics[HitResult.MISS] == 0
    assert fixed.total_hits == 26
    assert fixed.perfect


def test_simulate_fc_mania_is_max(simulator):
    attributes = make_attributes(3, total_hits=900, max_combo=900)
    score = simulator.simulate(attributes, total_score=600000)
    fixed = simulator.simulate_fc(score, attributes)
    assert fixed.total_score == 1000000
    assert fixed.accuracy == 1


@pytest.mark.parametrize("attributes", ALL_ATTRIBUTES)
def test_simulate_max(simulator, attributes):
    first = simulator.simulate_max(attributes)
    second = simulator.simulate_max(attributes)

    for score in (first, second):
        assert score.accuracy == 1
        assert score.perfect
        assert score.max_combo == attributes.max_combo
        assert score.count_miss == 0
        assert score.passed
    assert first.statistics == second.statistics


def test_simulate_max_mania_score_is_unscaled(simulator):
    score = simulator.simulate_max(make_attributes(3, total_hits=10, max_combo=10, mods='NF'))
    assert score.total_score == 1000000


def test_complete_replay_keeps_recorded_counts(simulator):
    date = datetime.datetime(2020, 1, 2, tzinfo=datetime.timezone.utc)
    replay = ScoreInfo(ruleset_id=0, username='cookiezi', max_combo=600,
        total_score=12345678, beatmap_hash_md5='abc', date=date, mods='HD')
    replay.count_300 = 490
    replay.count_100 = 7
    replay.count_50 = 1
    replay.count_miss = 2

    score = simulator.complete_replay(replay, make_attributes(total_hits=500,
        max_combo=600, mods='HD', beatmap_id=77))
    assert score.beatmap_id == 77
    assert score.username == 'cookiezi'
    assert score.count_300 == 490
    assert score.count_miss == 2
    assert score.total_score == 12345678
    assert score.beatmap_hash_md5 == 'abc'
    assert score.date == date
    assert score.perfect
    assert score.accuracy == pytest.approx(calculate_accuracy(score))


def test_complete_replay_converts_counts_between_rulesets(simulator):
    replay = ScoreInfo(ruleset_id=0, max_combo=10)
    replay.count_300 = 10
    replay.count_100 = 5
    replay.count_50 = 3
    replay.count_miss = 1

    score = simulator.complete_replay(replay, make_catch_attributes(10, 5, 3))
    assert score.ruleset_id == GameMode.FRUITS
    assert score.statistics[HitResult.GREAT] == 10
    assert score.statistics[HitResult.LARGE_TICK_HIT] == 5
    assert score.statistics[HitResult.SMALL_TICK_HIT] == 3
    assert score.statistics[HitResult.MISS] == 1
    assert not score.perfect


def test_complete_replay_that_stops_early_is_failed(simulator):
    replay = ScoreInfo(ruleset_id=0, max_combo=100, mods='HD')
    replay.count_300 = 100

    score = simulator.complete_replay(replay, make_attributes(total_hits=500,
        max_combo=600, mods='HD'))
    assert not score.passed
    assert score.rank == ScoreRank.F
    assert score.accuracy == 1


def test_simulate_fc_keeps_score_mods(simulator):
    attributes = make_attributes(total_hits=500, max_combo=600)
    choked = simulator.simulate(make_attributes(total_hits=500, max_combo=600,
        mods='HDDT'), count_miss=5, count_100=20, count_50=2)

    fixed = simulator.simulate_fc(choked, attributes)
    assert str(fixed.mods) == 'HDDT'
    assert fixed.rank == ScoreRank.SH
