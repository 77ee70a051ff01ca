"""Async client for the remote trivia API that supplies categories and clues."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import httpx

from .game import (
    CATEGORY_POOL_SIZE,
    CATEGORY_TOTAL,
    CLUES_PER_CATEGORY,
    Category,
    Clue,
)

logger = logging.getLogger(__name__)

API_URL = "https://rithm-jeopardy.herokuapp.com/api/"

CategoryId = Any


class NetworkError(Exception):
    """Raised when the trivia API cannot be reached or returns unusable data."""


def _sample(items: Sequence[Any], count: int, rng: random.Random) -> List[Any]:
    # Short pools give back everything they have, in random order
    return rng.sample(list(items), min(count, len(items)))


@dataclass
class TriviaClient:
    """Fetches random categories and clues.

    ``transport`` lets tests swap the network for ``httpx.MockTransport``;
    ``rng`` makes the sampling reproducible.
    """

    base_url: str = API_URL
    category_total: int = CATEGORY_TOTAL
    clues_per_category: int = CLUES_PER_CATEGORY
    pool_size: int = CATEGORY_POOL_SIZE
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    # ---- public API ----

    async def fetch_category_ids(
        self, http: Optional[httpx.AsyncClient] = None
    ) -> List[CategoryId]:
        """Draw ``category_total`` distinct ids from a pool of candidates."""
        payload = await self._get_json("categories", {"count": self.pool_size}, http)
        try:
            # The pool may list a category more than once
            ids = list(dict.fromkeys(category["id"] for category in payload))
        except (KeyError, TypeError) as exc:
            logger.error("Failed to fetch category IDs: malformed payload")
            raise NetworkError("Malformed category list") from exc
        return _sample(ids, self.category_total, self.rng)

    async def fetch_category_data(
        self, category_id: CategoryId, http: Optional[httpx.AsyncClient] = None
    ) -> Category:
        """Fetch one category and sample its clues, all starting hidden."""
        payload = await self._get_json("category", {"id": category_id}, http)
        try:
            title = payload["title"]
            pairs = dict.fromkeys((c["question"], c["answer"]) for c in payload["clues"])
            picked = _sample(list(pairs), self.clues_per_category, self.rng)
        except (KeyError, TypeError) as exc:
            logger.error("Failed to fetch category data for %r: malformed payload", category_id)
            raise NetworkError(f"Malformed category {category_id!r}") from exc
        clues = [Clue(question=question, answer=answer) for question, answer in picked]
        return Category(title=title, clues=clues)

    async def fetch_categories(self) -> List[Category]:
        """Fetch a full board over one connection pool; categories keep the
        order their ids were drawn in."""
        async with self._open() as http:
            ids = await self.fetch_category_ids(http)
            return list(
                await asyncio.gather(
                    *(self.fetch_category_data(cid, http) for cid in ids)
                )
            )

    # ---- helpers ----

    def _open(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport)

    async def _get_json(
        self, path: str, params: dict, http: Optional[httpx.AsyncClient] = None
    ) -> Any:
        try:
            if http is None:
                async with self._open() as own:
                    response = await own.get(path, params=params)
            else:
                response = await http.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Request to %s%s failed: %s", self.base_url, path, exc)
            raise NetworkError(f"GET {path} failed") from exc
