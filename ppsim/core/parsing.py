import logging

from ppsim.beatmap_parser.beatmap_parser import parse_beatmap_data
from ppsim.errors import DownloadError, HashMismatchError, MissingInputError
from ppsim.replay_parser.replay import parse_replay_data

logger = logging.getLogger(__name__)


def _check_hash(expected, actual, message):
    if expected and actual and expected.lower() != actual.lower():
        logger.warning('{} expected {}, got {}'.format(message, expected, actual))
        raise HashMismatchError(message)


# Download and decode a beatmap
# @param  {Downloader} downloader
# @param  {Integer}    beatmap_id
# @param  {String}     file_url    used instead of the beatmap id
# @param  {String}     hash        expected MD5 of the file
# @param  {String}     save_path   keep the file there
# @return {Tuple}      (Beatmap, md5)
async def parse_beatmap(downloader, beatmap_id=None, file_url=None, hash=None,
    save_path=None):
    if not beatmap_id and not file_url:
        raise MissingInputError('No beatmap ID or beatmap URL was specified!')

    result = await downloader.download(beatmap_id=beatmap_id, url=file_url,
        save=bool(save_path), file_type='beatmap', root_path=save_path)

    if not result.is_successful:
        raise DownloadError('Beatmap {} could not be downloaded ({})'.format(
            beatmap_id or file_url, result.status))

    _check_hash(hash, result.md5, 'Beatmap MD5 hash mismatch!')

    beatmap = parse_beatmap_data(result.buffer)
    if not beatmap.beatmap_id and beatmap_id:
        beatmap.metadata["beatmap_id"] = int(beatmap_id)
    return beatmap, result.md5


async def parse_score(downloader, replay_url=None, hash=None, save_path=None):
    if not replay_url:
        raise MissingInputError('No replay URL was specified!')

    result = await downloader.download(url=replay_url, save=bool(save_path),
        file_type='replay', root_path=save_path)

    if not result.is_successful:
        raise DownloadError('Replay could not be downloaded from {} ({})'.format(
            replay_url, result.status))

    _check_hash(hash, result.md5, 'Replay MD5 hash mismatch!')

    return parse_replay_data(result.buffer), result.md5
