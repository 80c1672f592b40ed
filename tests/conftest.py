"""Shared fixtures for the ppsim test suite: small .osu maps and a fake downloader."""

import copy

import pytest

from ppsim.beatmap_parser.beatmap_parser import parse_beatmap_data
from ppsim.config import DEFAULT_CONFIG
from ppsim.core.attributes import BeatmapAttributes
from ppsim.core.downloading import DownloadResult, DownloadStatus, get_md5


# --- Beatmaps ---

# 2 circles, a one beat slider (head + tail) and a spinner: max combo 5
STD_MAP = """osu file format v14

[General]
AudioFilename: audio.mp3
Mode: 0

[Metadata]
Title:Test Song
Artist:Tester
Creator:ppsim
Version:Normal
BeatmapID:100
BeatmapSetID:10

[Difficulty]
HPDrainRate:5
CircleSize:4
OverallDifficulty:8
ApproachRate:9
SliderMultiplier:1.4
SliderTickRate:1

[Events]
//Background and Video events

[TimingPoints]
0,500,4,2,0,100,1,0

[HitObjects]
256,192,1000,1,0,0:0:0:0:
300,192,1500,1,0,0:0:0:0:
100,100,2000,2,0,L|240:100,1,140
256,192,3000,12,0,4000,0:0:0:0:
"""

# a circle and a three beat slider: 3 fruits, 2 droplets, 21 tiny droplets
CATCH_MAP = """osu file format v14

[General]
Mode: 2

[Metadata]
Title:Catch Song
Artist:Tester
Creator:ppsim
Version:Salad
BeatmapID:200
BeatmapSetID:20

[Difficulty]
HPDrainRate:5
CircleSize:4
OverallDifficulty:8
ApproachRate:8
SliderMultiplier:1.4
SliderTickRate:1

[TimingPoints]
0,500,4,2,0,100,1,0

[HitObjects]
256,192,1000,1,0,0:0:0:0:
100,100,2000,2,0,L|520:100,1,420
"""

# two notes and a hold note
MANIA_MAP = """osu file format v14

[General]
Mode: 3

[Metadata]
Title:Mania Song
Artist:Tester
Creator:ppsim
Version:4K Normal
BeatmapID:300
BeatmapSetID:30

[Difficulty]
HPDrainRate:7
CircleSize:4
OverallDifficulty:8
ApproachRate:5
SliderMultiplier:1.4
SliderTickRate:1

[TimingPoints]
0,400,4,2,0,100,1,0

[HitObjects]
64,192,1000,1,0,0:0:0:0:
192,192,1100,1,0,0:0:0:0:
320,192,1200,128,0,1500:0:0:0:0:
"""

TAIKO_MAP = """osu file format v14

[General]
Mode: 1

[Metadata]
Title:Taiko Song
Artist:Tester
Creator:ppsim
Version:Oni
BeatmapID:400
BeatmapSetID:40

[Difficulty]
HPDrainRate:5
CircleSize:5
OverallDifficulty:5
ApproachRate:5
SliderMultiplier:1.4
SliderTickRate:1

[TimingPoints]
0,500,4,2,0,100,1,0

[HitObjects]
256,192,1000,1,0,0:0:0:0:
256,192,1250,1,2,0:0:0:0:
256,192,1500,1,8,0:0:0:0:
256,192,2000,2,0,L|400:192,1,140
"""

MAPS = {
    100: STD_MAP,
    200: CATCH_MAP,
    300: MANIA_MAP,
    400: TAIKO_MAP,
}


def map_bytes(beatmap_id):
    return MAPS[beatmap_id].encode('utf-8')


def map_md5(beatmap_id):
    return get_md5(map_bytes(beatmap_id))


@pytest.fixture
def std_beatmap():
    return parse_beatmap_data(STD_MAP)


@pytest.fixture
def catch_beatmap():
    return parse_beatmap_data(CATCH_MAP)


@pytest.fixture
def mania_beatmap():
    return parse_beatmap_data(MANIA_MAP)


@pytest.fixture
def taiko_beatmap():
    return parse_beatmap_data(TAIKO_MAP)


# --- Factory Helpers ---


def make_attributes(ruleset_id=0, total_hits=500, max_combo=600, mods='NM', **kwargs):
    """BeatmapAttributes with sensible defaults."""
    return BeatmapAttributes(beatmap_id=kwargs.pop('beatmap_id', 1),
        ruleset_id=ruleset_id, total_hits=total_hits, max_combo=max_combo,
        mods=mods, **kwargs)


def make_catch_attributes(max_fruits=250, max_droplets=50, max_tiny_droplets=200, mods='NM'):
    return BeatmapAttributes(beatmap_id=2, ruleset_id=2, mods=mods,
        total_hits=max_fruits + max_droplets + max_tiny_droplets,
        max_combo=max_fruits + max_droplets, max_fruits=max_fruits,
        max_droplets=max_droplets, max_tiny_droplets=max_tiny_droplets)


class FakeDownloader(object):
    """Serves files from memory, keyed by beatmap id or url."""

    def __init__(self, files=None):
        self.files = files if files is not None else dict(
            (beatmap_id, map_bytes(beatmap_id)) for beatmap_id in MAPS)
        self.calls = []

    async def download(self, beatmap_id=None, url=None, save=False,
        file_type='beatmap', root_path=None):
        key = url or beatmap_id
        self.calls.append(key)

        data = self.files.get(key)
        if data is None:
            return DownloadResult(DownloadStatus.FAILED_TO_DOWNLOAD, url=url)
        if not data:
            return DownloadResult(DownloadStatus.EMPTY_FILE, url=url)
        return DownloadResult(DownloadStatus.IN_MEMORY, data, get_md5(data), url=url)


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def config():
    return copy.deepcopy(DEFAULT_CONFIG)
