import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from cardset.core.errors import FetchError
from cardset.schemas.cards import CardRecord

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.scryfall.com"


def search_params(set_code: str) -> dict[str, str]:
    return {"q": f"set:{set_code} lang:en game:paper", "unique": "cards"}


def _api_error_message(resp: httpx.Response) -> str:
    # Scryfall error objects carry a human readable "details" field
    detail = None
    try:
        body = resp.json()
        if isinstance(body, dict):
            detail = body.get("details")
    except ValueError:
        pass
    return f"API Error: {detail or resp.reason_phrase or resp.status_code}"


def _parse_page(resp: httpx.Response) -> tuple[list[CardRecord], bool, Optional[str]]:
    if not resp.is_success:
        raise FetchError(_api_error_message(resp))
    page = resp.json()
    if not isinstance(page, dict) or not isinstance(page.get("data"), list):
        raise FetchError("Invalid payload: expected object with 'data' list")
    cards = [CardRecord.model_validate(c) for c in page["data"]]
    return cards, bool(page.get("has_more")), page.get("next_page")


async def fetch_all_cards(
    client: httpx.AsyncClient,
    set_code: str,
    *,
    api_base_url: str = DEFAULT_API_BASE_URL,
    delay: float = 0.1,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> list[CardRecord]:
    """Page through the card search for ``set_code`` and return every record.

    Pagination follows ``next_page`` while ``has_more`` is set, sleeping
    ``delay`` seconds between pages. Any failure stops paging; whatever was
    collected up to that point is returned.
    """
    all_cards: list[CardRecord] = []
    next_url: Optional[str] = f"{api_base_url.rstrip('/')}/cards/search"
    params: Optional[dict[str, str]] = search_params(set_code)

    logger.info("Starting card data fetch for set: %s", set_code.upper())

    while next_url:
        try:
            resp = await client.get(next_url, params=params)
            cards, has_more, next_page = _parse_page(resp)
        except (httpx.HTTPError, ValueError, FetchError) as exc:
            logger.error(
                "An error occurred while fetching card data (%s): %s",
                getattr(exc, "code", "fetch_error"),
                exc,
            )
            logger.error("Stopping fetch. The data may be incomplete.")
            break

        all_cards.extend(cards)
        logger.info("Fetched %d cards. Total so far: %d", len(cards), len(all_cards))

        if has_more and next_page:
            # next_page already carries the query string
            next_url, params = next_page, None
            await sleep(delay)
        else:
            next_url = None

    logger.info(
        "Finished fetching. Found %d total card entries for %s.", len(all_cards), set_code.upper()
    )
    return all_cards
