"""Tests for ppsim.rulesets -- registry, conversion, difficulty and performance."""

import pytest

from ppsim.core.difficulty import (calculate_difficulty, calculate_performance,
    to_difficulty_attributes)
from ppsim.core.score_info import ScoreInfo
from ppsim.core.score_simulator import ScoreSimulator
from ppsim.enums import GameMode
from ppsim.errors import BeatmapConversionError, MissingInputError, UnknownRulesetError
from ppsim.rulesets import taiko
from ppsim.rulesets.mods import ModCombination
from ppsim.rulesets.registry import (get_ruleset_by_id, get_ruleset_by_name,
    get_ruleset_id_by_name, to_ruleset_id)
from ppsim.rulesets.standard import StandardDifficultyAttributes

from conftest import make_attributes, make_catch_attributes

SIMULATOR = ScoreSimulator()


# --- Registry ---


@pytest.mark.parametrize("name,ruleset_id", [
    ('standard', 0), ('std', 0), ('OSU', 0), ('taiko', 1),
    ('ctb', 2), ('catch', 2), ('fruits', 2), ('Mania', 3),
])
def test_ruleset_names(name, ruleset_id):
    assert get_ruleset_id_by_name(name) == ruleset_id
    assert get_ruleset_by_name(name).id == ruleset_id


def test_unknown_ruleset():
    with pytest.raises(UnknownRulesetError) as excinfo:
        get_ruleset_id_by_name('drums')
    assert 'drums' in str(excinfo.value)
    assert 'mania' in str(excinfo.value)

    with pytest.raises(ValueError):
        get_ruleset_by_id(4)


def test_to_ruleset_id():
    assert to_ruleset_id(None) is None
    assert to_ruleset_id(2) == 2
    assert to_ruleset_id('3') == 3
    assert to_ruleset_id('taiko') == 1
    with pytest.raises(UnknownRulesetError):
        to_ruleset_id(7)


# --- Conversion ---


def test_hard_rock(std_beatmap):
    beatmap = get_ruleset_by_id(0).apply_to_beatmap_with_mods(std_beatmap, 'HR')
    assert beatmap.difficulty.circle_size == pytest.approx(5.2)
    assert beatmap.difficulty.approach_rate == 10
    assert beatmap.difficulty.overall_difficulty == 10
    assert beatmap.difficulty.drain_rate == 7
    assert std_beatmap.difficulty.approach_rate == 9


def test_hard_rock_keeps_taiko_circle_size(std_beatmap):
    beatmap = get_ruleset_by_id(1).apply_to_beatmap_with_mods(std_beatmap, 'HR')
    assert beatmap.difficulty.circle_size == 4
    assert beatmap.mode == GameMode.TAIKO


def test_easy_and_clock_rate(std_beatmap):
    beatmap = get_ruleset_by_id(0).apply_to_beatmap_with_mods(std_beatmap, 'EZHT')
    assert beatmap.difficulty.approach_rate == 4.5
    assert beatmap.difficulty.circle_size == 2
    assert beatmap.difficulty.clock_rate == 0.75
    assert str(beatmap.mods) == 'EZHT'


def test_only_standard_maps_convert(mania_beatmap):
    with pytest.raises(BeatmapConversionError):
        get_ruleset_by_id(0).apply_to_beatmap_with_mods(mania_beatmap)
    assert get_ruleset_by_id(3).apply_to_beatmap_with_mods(mania_beatmap).total_hits == 3


# --- osu!standard difficulty and performance ---


def test_standard_difficulty(std_beatmap):
    ruleset = get_ruleset_by_id(0)
    beatmap = ruleset.apply_to_beatmap_with_mods(std_beatmap)
    difficulty = calculate_difficulty(beatmap, ruleset)

    assert difficulty.star_rating > 0
    assert difficulty.aim_strain > 0
    assert difficulty.max_combo == 5
    assert difficulty.hit_circle_count == 2
    assert difficulty.slider_count == 1
    assert difficulty.spinner_count == 1
    assert difficulty.approach_rate == pytest.approx(9)
    assert difficulty.overall_difficulty == pytest.approx(8)


def test_standard_double_time(std_beatmap):
    ruleset = get_ruleset_by_id(0)
    nomod = calculate_difficulty(ruleset.apply_to_beatmap_with_mods(std_beatmap), ruleset)
    double_time = calculate_difficulty(
        ruleset.apply_to_beatmap_with_mods(std_beatmap, 'DT'), ruleset)

    assert double_time.star_rating > nomod.star_rating
    assert double_time.clock_rate == 1.5
    assert double_time.approach_rate == pytest.approx(31 / 3)
    assert str(double_time.mods) == 'DT'


def test_standard_partial_difficulty(std_beatmap):
    ruleset = get_ruleset_by_id(0)
    beatmap = ruleset.apply_to_beatmap_with_mods(std_beatmap)
    difficulty = calculate_difficulty(beatmap, ruleset, total_hits=2)
    assert difficulty.hit_circle_count == 2
    assert difficulty.slider_count == 0
    assert difficulty.max_combo == 2


def test_standard_skills(std_beatmap):
    ruleset = get_ruleset_by_id(0)
    calculator = ruleset.create_difficulty_calculator(
        ruleset.apply_to_beatmap_with_mods(std_beatmap))
    assert calculator.get_skills() == []

    calculator.calculate()
    skills = calculator.get_skills()
    assert [skill['title'] for skill in skills] == ['Aim', 'Speed']
    # objects from 1000ms to 3000ms
    assert len(skills[0]['strain_peaks']) == 6


def test_difficulty_needs_beatmap():
    with pytest.raises(MissingInputError):
        calculate_difficulty(None, get_ruleset_by_id(0))


def test_standard_performance(std_beatmap):
    ruleset = get_ruleset_by_id(0)
    difficulty = calculate_difficulty(ruleset.apply_to_beatmap_with_mods(std_beatmap),
        ruleset)
    attributes = make_attributes(total_hits=4, max_combo=5)

    best = calculate_performance(difficulty, SIMULATOR.simulate_max(attributes), ruleset)
    choke = calculate_performance(difficulty,
        SIMULATOR.simulate(attributes, count_miss=1), ruleset)

    assert best.total_performance > 0
    assert best.accuracy_performance > 0
    assert choke.total_performance < best.total_performance
    assert best.to_dict()['mods'] == 'NM'


# --- Other rulesets ---


@pytest.mark.parametrize("fixture, ruleset_id, max_combo", [
    ('taiko_beatmap', 1, 3),
    ('catch_beatmap', 2, 5),
    ('mania_beatmap', 3, 3),
])
def test_star_rating_from_beatmap(request, fixture, ruleset_id, max_combo):
    ruleset = get_ruleset_by_id(ruleset_id)
    beatmap = ruleset.apply_to_beatmap_with_mods(request.getfixturevalue(fixture))
    difficulty = calculate_difficulty(beatmap, ruleset)

    assert isinstance(difficulty, ruleset.difficulty_attributes_class)
    assert difficulty.star_rating >= 0
    assert difficulty.max_combo == max_combo
    assert str(difficulty.mods) == 'NM'


def test_taiko_difficulty(taiko_beatmap):
    ruleset = get_ruleset_by_id(1)
    difficulty = calculate_difficulty(
        ruleset.apply_to_beatmap_with_mods(taiko_beatmap, 'HR'), ruleset)

    assert str(difficulty.mods) == 'HR'
    assert difficulty.great_hit_window > 0
    assert difficulty.overall_difficulty == 5


def test_taiko_partial_difficulty(taiko_beatmap):
    ruleset = get_ruleset_by_id(1)
    beatmap = ruleset.apply_to_beatmap_with_mods(taiko_beatmap)
    full = calculate_difficulty(beatmap, ruleset)
    partial = calculate_difficulty(beatmap, ruleset, total_hits=2)

    assert partial.max_combo == 2
    assert partial.star_rating <= full.star_rating


def test_catch_double_time_approach_rate(catch_beatmap):
    ruleset = get_ruleset_by_id(2)
    nomod = calculate_difficulty(ruleset.apply_to_beatmap_with_mods(catch_beatmap), ruleset)
    double_time = calculate_difficulty(
        ruleset.apply_to_beatmap_with_mods(catch_beatmap, 'DT'), ruleset)

    assert nomod.approach_rate == pytest.approx(8)
    assert double_time.approach_rate == pytest.approx(29 / 3)
    assert double_time.max_combo == 5


def test_mania_difficulty_hit_window(mania_beatmap):
    ruleset = get_ruleset_by_id(3)
    difficulty = calculate_difficulty(
        ruleset.apply_to_beatmap_with_mods(mania_beatmap, 'EZ'), ruleset)

    assert difficulty.overall_difficulty == 4
    assert difficulty.great_hit_window == 52


def test_catch_passed_objects_skip_tiny_droplets():
    ruleset = get_ruleset_by_id(2)
    score = ScoreInfo(ruleset_id=2)
    score.count_300 = 2
    score.count_100 = 1
    score.count_50 = 15
    score.count_miss = 1
    assert ruleset.count_passed_objects(score.statistics) == 4


def test_taiko_hit_window():
    assert taiko.get_great_hit_window(5, ModCombination()) == 34.5
    assert taiko.get_great_hit_window(5, ModCombination('DT')) == 23
    assert taiko.get_great_hit_window(5, ModCombination('HR')) == 28.5


def test_taiko_performance():
    ruleset = get_ruleset_by_id(1)
    attributes = make_attributes(1, total_hits=1000, max_combo=1000)
    difficulty = to_difficulty_attributes({'star_rating': 5, 'max_combo': 1000,
        'great_hit_window': 30}, ruleset)

    best = calculate_performance(difficulty, SIMULATOR.simulate_max(attributes))
    worse = calculate_performance(difficulty,
        SIMULATOR.simulate(attributes, accuracy=95, count_miss=10))
    hidden = calculate_performance(difficulty,
        SIMULATOR.simulate_max(make_attributes(1, 1000, 1000, mods='HD')))

    assert best.total_performance > worse.total_performance > 0
    assert hidden.total_performance > best.total_performance


def test_taiko_performance_without_hit_window():
    ruleset = get_ruleset_by_id(1)
    attributes = make_attributes(1, total_hits=500, max_combo=500)
    difficulty = to_difficulty_attributes({'star_rating': 4, 'max_combo': 500,
        'overall_difficulty': 5}, ruleset)
    assert calculate_performance(difficulty,
        SIMULATOR.simulate_max(attributes)).total_performance > 0


def test_catch_performance():
    ruleset = get_ruleset_by_id(2)
    attributes = make_catch_attributes()
    difficulty = to_difficulty_attributes({'star_rating': 5, 'max_combo': 300,
        'approach_rate': 9}, ruleset)

    best = calculate_performance(difficulty, SIMULATOR.simulate_max(attributes))
    low_combo = calculate_performance(difficulty,
        SIMULATOR.simulate(attributes, percent_combo=50))
    assert best.total_performance > low_combo.total_performance > 0

    empty = to_difficulty_attributes({'star_rating': 5, 'max_combo': 0}, ruleset)
    assert calculate_performance(empty, SIMULATOR.simulate_max(attributes)).total_performance == 0


def test_mania_performance_uses_unscaled_score():
    ruleset = get_ruleset_by_id(3)
    difficulty = to_difficulty_attributes({'star_rating': 4, 'max_combo': 1000,
        'great_hit_window': 40}, ruleset)

    nomod = SIMULATOR.simulate(make_attributes(3, 1000, 1000))
    easy = SIMULATOR.simulate(make_attributes(3, 1000, 1000, mods='EZ'))
    assert easy.total_score == 500000

    nomod_pp = calculate_performance(difficulty, nomod).total_performance
    easy_pp = calculate_performance(difficulty, easy).total_performance
    assert easy_pp == pytest.approx(nomod_pp * 0.5)


def test_mania_low_score_gives_nothing():
    ruleset = get_ruleset_by_id(3)
    difficulty = to_difficulty_attributes({'star_rating': 4, 'max_combo': 1000}, ruleset)
    score = SIMULATOR.simulate(make_attributes(3, 1000, 1000), total_score=400000)
    assert calculate_performance(difficulty, score).total_performance == 0


def test_to_difficulty_attributes():
    ruleset = get_ruleset_by_id(0)
    difficulty = to_difficulty_attributes({'star_rating': 6.1, 'aim_strain': 3,
        'unknown': 1, 'mods': 'HD'}, ruleset)
    assert isinstance(difficulty, StandardDifficultyAttributes)
    assert difficulty.star_rating == 6.1
    assert not hasattr(difficulty, 'unknown')
    assert str(difficulty.mods) == 'HD'
    assert to_difficulty_attributes(difficulty, ruleset) is difficulty


def test_score_ruleset_property():
    assert ScoreInfo(ruleset_id=3).ruleset.id == GameMode.MANIA
