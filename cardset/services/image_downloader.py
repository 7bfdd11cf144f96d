import logging
import os
import tempfile
from pathlib import Path

import httpx

from cardset.core.errors import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


async def _write_stream(resp: httpx.Response, dest: Path) -> None:
    # stream into a sibling temp file so dest only ever holds a complete image
    fd, tmp_path = tempfile.mkstemp(dir=str(dest.parent), prefix=f".{dest.name}.", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as fh:
            async for chunk in resp.aiter_bytes(chunk_size=CHUNK_SIZE):
                fh.write(chunk)
        Path(tmp_path).replace(dest)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise


async def download_image(client: httpx.AsyncClient, url: str, filepath: str | Path) -> bool:
    """Stream ``url`` into ``filepath`` unless the file is already there.

    Returns True when a file was written and False when it already existed.
    The parent directory must exist.
    """
    dest = Path(filepath)
    if dest.exists():
        logger.debug("Skipping %s, already downloaded", dest)
        return False

    try:
        async with client.stream("GET", url) as resp:
            if not resp.is_success:
                raise DownloadError(
                    f"Failed to download {url}. Status: {resp.status_code}",
                    url=url,
                    status_code=resp.status_code,
                )
            await _write_stream(resp, dest)
    except (httpx.HTTPError, httpx.StreamError) as exc:
        raise DownloadError(f"Failed to download {url}: {exc}", url=url) from exc
    except OSError as exc:
        raise DownloadError(f"Failed to write {dest}: {exc}", url=url) from exc
    return True
