"""Storefront scraper."""

import logging
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup, Tag

from shop_watch.core import Item, ItemSource
from shop_watch.errors import ScrapeError


logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")
_STOCK_RE = re.compile(r"(\d+)\s+(?:left|remaining|in stock)", re.IGNORECASE)


class ShopSource(ItemSource):
    """Fetch shop listings from the storefront HTML using a session cookie.

    Each listing is expected to be an element carrying a ``data-shop-item-id``
    attribute with the title in a heading, the price in a ``.price`` element
    and the remaining stock as "N left" somewhere in the card.
    """

    def __init__(
        self,
        cookie: str,
        url: str = "https://summer.hackclub.com/shop",
        cookie_name: str = "_journey_session",
        timeout: float = 30.0,
    ) -> None:
        self.cookie = cookie
        self.url = url
        self.cookie_name = cookie_name
        self.timeout = timeout

    async def fetch_items(self) -> list[Item]:
        """Fetch and parse every listing on the shop page.

        Raises:
            ScrapeError: On transport failure, a rejected session or a page
                without any listings.
        """
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=False,
            cookies={self.cookie_name: self.cookie},
        ) as client:
            try:
                response = await client.get(self.url)
            except httpx.HTTPError as e:
                raise ScrapeError(f"Could not fetch {self.url}: {e}") from e

        if response.is_redirect:
            raise ScrapeError(
                f"Shop redirected to {response.headers.get('location')}; is the session cookie still valid?"
            )
        if response.status_code != 200:
            raise ScrapeError(f"Shop returned HTTP {response.status_code}")

        items = self.parse_items(response.text)
        if not items:
            raise ScrapeError("No shop items found on the page")

        logger.info("🛒 Scraped %d shop items", len(items))
        return items

    def parse_items(self, html: str) -> list[Item]:
        """Extract items from the shop page HTML."""
        soup = BeautifulSoup(html, "html.parser")
        items: list[Item] = []

        for card in soup.select("[data-shop-item-id]"):
            try:
                items.append(self._parse_card(card))
            except ValueError as e:
                raise ScrapeError(f"Malformed shop item: {e}") from e

        return items

    def _parse_card(self, card: Tag) -> Item:
        item_id = str(card.get("data-shop-item-id", "")).strip()

        title_el = card.find(["h1", "h2", "h3", "h4"])
        title = title_el.get_text(strip=True) if title_el else ""

        description_el = card.select_one(".description") or card.find("p")
        description = description_el.get_text(" ", strip=True) if description_el else ""

        img = card.find("img")
        image_url = str(img["src"]) if img and img.get("src") else None

        options = [
            option.get_text(strip=True)
            for option in card.select("select option")
            if option.get_text(strip=True)
        ]

        return Item(
            id=item_id,
            title=title,
            description=description,
            price=self._parse_price(card),
            stock_remaining=self._parse_stock(card),
            image_url=image_url,
            options=options,
        )

    @staticmethod
    def _parse_price(card: Tag) -> Optional[float]:
        price_el = card.select_one(".price")
        if not price_el:
            return None
        match = _NUMBER_RE.search(price_el.get_text())
        if not match:
            return None
        return float(match.group(0).replace(",", "."))

    @staticmethod
    def _parse_stock(card: Tag) -> Optional[int]:
        match = _STOCK_RE.search(card.get_text(" ", strip=True))
        return int(match.group(1)) if match else None
