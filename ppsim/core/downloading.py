import asyncio
import hashlib
import logging
import os

import aiofiles
import aiohttp

logger = logging.getLogger(__name__)

DEFAULT_BEATMAP_URL = 'https://osu.ppy.sh/osu/{}'


class DownloadStatus(object):
    FAILED_TO_DOWNLOAD = 'failed_to_download'
    EMPTY_FILE = 'empty_file'
    FAILED_TO_WRITE = 'failed_to_write'
    FILE_EXISTS = 'file_exists'
    WRITTEN = 'written'
    IN_MEMORY = 'in_memory'


class DownloadResult(object):
    def __init__(self, status, buffer=None, md5=None, file_path=None, url=None):
        self.status = status
        self.buffer = buffer
        self.md5 = md5
        self.file_path = file_path
        self.url = url

    @property
    def is_successful(self):
        return self.status in (DownloadStatus.FILE_EXISTS, DownloadStatus.WRITTEN,
            DownloadStatus.IN_MEMORY)

    def __repr__(self):
        return '<DownloadResult {} {}>'.format(self.status, self.url)


def get_md5(data):
    return hashlib.md5(data).hexdigest()


class Downloader(object):
    """Fetches beatmaps and replays over HTTP.

    Files are only written when ``save`` is requested and a root path is set,
    saved beatmaps are read back instead of downloaded again.
    """

    def __init__(self, root_path=None, beatmap_url=DEFAULT_BEATMAP_URL, timeout=30,
        session=None):
        self.root_path = root_path
        self.beatmap_url = beatmap_url
        self.timeout = timeout
        self.session = session

    @classmethod
    def from_config(cls, config):
        download = config.get('download', {})
        return cls(root_path=download.get('save_path'),
            beatmap_url=download.get('beatmap_url', DEFAULT_BEATMAP_URL),
            timeout=download.get('timeout', 30))

    def get_file_path(self, file_name, root_path=None):
        root_path = root_path or self.root_path
        if not root_path:
            return None
        return os.path.join(root_path, file_name)

    # Download a beatmap by id or any file by url
    # @param  {Integer} beatmap_id
    # @param  {String}  url        takes priority over the beatmap id
    # @param  {Boolean} save       write the file under the root path
    # @param  {String}  file_type  'beatmap' or 'replay'
    # @return {DownloadResult}
    async def download(self, beatmap_id=None, url=None, save=False, file_type='beatmap',
        root_path=None):
        extension = '.osr' if file_type == 'replay' else '.osu'

        if not url:
            url = self.beatmap_url.format(beatmap_id)

        # only files named by id can be found before downloading
        cached_path = None
        if beatmap_id and file_type == 'beatmap':
            cached_path = self.get_file_path('{}{}'.format(beatmap_id, extension), root_path)

        if cached_path and os.path.isfile(cached_path):
            async with aiofiles.open(cached_path, mode='rb') as f:
                buffer = await f.read()
            if buffer:
                logger.debug('Using saved {} {}'.format(file_type, cached_path))
                return DownloadResult(DownloadStatus.FILE_EXISTS, buffer,
                    get_md5(buffer), cached_path, url)

        buffer = await self._fetch(url)
        if buffer is None:
            return DownloadResult(DownloadStatus.FAILED_TO_DOWNLOAD, url=url)
        if not buffer:
            logger.warning('Empty {} downloaded from {}'.format(file_type, url))
            return DownloadResult(DownloadStatus.EMPTY_FILE, url=url)

        md5 = get_md5(buffer)
        if not save:
            return DownloadResult(DownloadStatus.IN_MEMORY, buffer, md5, url=url)

        file_name = '{}{}'.format(beatmap_id if beatmap_id and file_type == 'beatmap'
            else md5, extension)
        file_path = self.get_file_path(file_name, root_path)
        if file_path is None:
            return DownloadResult(DownloadStatus.IN_MEMORY, buffer, md5, url=url)

        try:
            os.makedirs(os.path.dirname(file_path), exist_ok=True)
            async with aiofiles.open(file_path, mode='wb') as f:
                await f.write(buffer)
        except OSError:
            logger.exception('Failed to write {}'.format(file_path))
            return DownloadResult(DownloadStatus.FAILED_TO_WRITE, buffer, md5, url=url)

        logger.info('Saved {} to {}'.format(file_type, file_path))
        return DownloadResult(DownloadStatus.WRITTEN, buffer, md5, file_path, url)

    async def _fetch(self, url):
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            if self.session is None:
                async with aiohttp.ClientSession() as session:
                    return await self._read(session, url, timeout)
            return await self._read(self.session, url, timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning('Failed to download {}: {}'.format(url, e))
            return None

    async def _read(self, session, url, timeout):
        async with session.get(url, timeout=timeout) as resp:
            if resp.status != 200:
                logger.warning('Failed to download {}: status {}'.format(url, resp.status))
                return None
            return await resp.read()
