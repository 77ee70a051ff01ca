"""Shared fixtures: a fake trivia API served through ``httpx.MockTransport``."""

from __future__ import annotations

import random

import httpx
import pytest

from jeopardy.client import TriviaClient


def make_handler(category_count: int = 100, clue_count: int = 10):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/categories"):
            count = int(request.url.params["count"])
            categories = [
                {"id": i, "title": f"Category {i}", "clues_count": clue_count}
                for i in range(min(count, category_count))
            ]
            return httpx.Response(200, json=categories)
        if request.url.path.endswith("/category"):
            cat_id = request.url.params["id"]
            clues = [
                {"id": n, "question": f"Q{cat_id}-{n}", "answer": f"A{cat_id}-{n}", "value": 100}
                for n in range(clue_count)
            ]
            return httpx.Response(
                200, json={"id": int(cat_id), "title": f"Category {cat_id}", "clues": clues}
            )
        return httpx.Response(404)

    return handler


@pytest.fixture
def transport() -> httpx.MockTransport:
    return httpx.MockTransport(make_handler())


@pytest.fixture
def trivia_client(transport: httpx.MockTransport) -> TriviaClient:
    return TriviaClient(transport=transport, rng=random.Random(1234))
