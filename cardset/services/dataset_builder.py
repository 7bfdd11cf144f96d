import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

import httpx

from cardset.core.config import Settings
from cardset.core.errors import DatasetWriteError
from cardset.schemas.cards import CardRecord, ImageTask
from cardset.services.fetcher import fetch_all_cards
from cardset.services.image_downloader import download_image

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D", re.ASCII)
_DIGITS = re.compile(r"\d", re.ASCII)


def split_collector_number(collector_number: str) -> tuple[str, str]:
    """Return (digits, everything else), e.g. "12a" -> ("12", "a")."""
    return _NON_DIGITS.sub("", collector_number), _DIGITS.sub("", collector_number)


def image_filename(record: CardRecord, face_index: Optional[int] = None) -> str:
    digits, suffix = split_collector_number(record.collector_number or "")
    if face_index is None:
        return f"{digits}{suffix}-{record.id}.jpg"
    # only front/back are distinguished; a third face also gets "b"
    face = "a" if face_index == 0 else "b"
    return f"{digits}{face}{suffix}-{record.id}.jpg"


def image_tasks(record: CardRecord, set_dir: str | Path, image_size: str = "normal") -> list[ImageTask]:
    set_dir = Path(set_dir)
    if record.image_uris and record.image_uris.get(image_size):
        path = set_dir / image_filename(record)
        return [ImageTask(url=record.image_uris[image_size], path=str(path))]

    tasks: list[ImageTask] = []
    seen: set[Path] = set()
    for index, face in enumerate(record.card_faces or []):
        if face.image_uris and face.image_uris.get(image_size):
            path = set_dir / image_filename(record, index)
            # faces past the second share the "b" filename; the first one wins
            if path in seen:
                continue
            seen.add(path)
            tasks.append(ImageTask(url=face.image_uris[image_size], path=str(path)))
    return tasks


def count_expected_images(records: Iterable[CardRecord]) -> int:
    total = 0
    for record in records:
        if record.image_uris:
            total += 1
        elif record.card_faces:
            total += sum(1 for face in record.card_faces if face.image_uris)
    return total


async def _download_record_images(
    client: httpx.AsyncClient,
    record: CardRecord,
    tasks: list[ImageTask],
    semaphore: asyncio.Semaphore,
) -> None:
    async def run(task: ImageTask) -> None:
        async with semaphore:
            await download_image(client, task.url, task.path)
        record.local_image_paths.append(task.path)

    results = await asyncio.gather(*(run(t) for t in tasks), return_exceptions=True)
    for task, result in zip(tasks, results):
        if isinstance(result, Exception):
            logger.error(
                "Image %s for card %s failed (%s, %s): %s",
                task.path,
                record.id,
                getattr(result, "code", "download_error"),
                getattr(result, "url", None) or task.url,
                result,
            )
        elif isinstance(result, BaseException):
            raise result


async def process_cards_and_images(
    client: httpx.AsyncClient,
    records: list[CardRecord],
    set_code: str,
    *,
    images_dir: str | Path = "images",
    image_size: str = "normal",
    max_concurrency: int = 2,
) -> list[CardRecord]:
    """Download every image referenced by ``records`` into ``images_dir/set_code``.

    Records are handled one after another; the images of a single record are
    fetched together, at most ``max_concurrency`` at a time. Each record gets a
    ``localImagePaths`` list holding the images that are now on disk.
    """
    set_dir = Path(images_dir) / set_code
    set_dir.mkdir(parents=True, exist_ok=True)

    semaphore = asyncio.Semaphore(max_concurrency)
    total = count_expected_images(records)
    attempted = 0
    logger.info("Starting image download for %d images...", total)

    for record in records:
        record.local_image_paths = []
        tasks = image_tasks(record, set_dir, image_size)
        if tasks:
            await _download_record_images(client, record, tasks, semaphore)
        attempted += len(tasks)
        print(f"\rDownloaded {attempted} of {total} images...", end="", flush=True)

    print()
    logger.info("Image download complete. All images saved in '%s'.", set_dir)
    return records


def write_dataset(records: list[CardRecord], path: str | Path) -> Path:
    path = Path(path)
    payload: list[dict[str, Any]] = [r.to_json() for r in records]
    try:
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        raise DatasetWriteError(str(exc)) from exc
    return path


def make_client(cfg: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=cfg.http_timeout,
        headers=cfg.http_headers,
        follow_redirects=True,
    )


async def build_dataset(
    set_code: str,
    cfg: Settings,
    *,
    client: Optional[httpx.AsyncClient] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Optional[Path]:
    """Fetch a set, download its images and write ``<set_code>.json``.

    Returns the dataset path, or None when nothing was written.
    """
    set_code = set_code.lower()
    output_path = Path(cfg.output_dir) / f"{set_code}.json"

    owns_client = client is None
    if client is None:
        client = make_client(cfg)
    try:
        records = await fetch_all_cards(
            client,
            set_code,
            api_base_url=cfg.api_base_url,
            delay=cfg.rate_limit_delay,
            sleep=sleep,
        )
        if not records:
            logger.warning("No cards were found for the set, or an error occurred. Exiting.")
            return None

        records = await process_cards_and_images(
            client,
            records,
            set_code,
            images_dir=cfg.images_dir,
            image_size=cfg.image_size,
            max_concurrency=cfg.max_concurrent_downloads,
        )
    finally:
        if owns_client:
            await client.aclose()

    try:
        write_dataset(records, output_path)
    except DatasetWriteError as exc:
        logger.error("Failed to write JSON file: %s", exc)
        return None
    logger.info("Successfully saved all card data to '%s'", output_path)
    return output_path
