"""Jeopardy package exposing game state, the trivia API client, and the web application."""

from .client import NetworkError, TriviaClient
from .controller import ScreenController
from .game import GameState
from .ui import app

__all__ = ["GameState", "NetworkError", "ScreenController", "TriviaClient", "app"]
