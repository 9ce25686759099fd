"""
Test configuration and fixtures for the seeded decoration engine.

This module provides pytest fixtures so that:
- DECKART_* environment overrides never leak into tests
- Tests share one sample deck and the reference scenario location
"""

import logging
import os
import sys

import pytest

# Ensure repo root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from deckart.seeded.sdk import DecorConfig, Location


SAMPLE_DECK = """<!DOCTYPE html>
<html>
<head><title>Deck</title></head>
<body>
<main class="deck">
<section class="slide" id="slide-1" data-width="800" data-height="600" style="font-size: 20px">
<h1>Intro</h1>
</section>
<section class="slide" id="slide-2">
<h2>Details</h2>
</section>
<aside class="notes">Not a slide</aside>
</main>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def clean_deckart_env(monkeypatch):
    """Strip DECKART_* overrides so every test starts from file defaults"""
    for key in ("DECKART_SEED_MODE", "DECKART_DENSITY", "DECKART_LAYERS"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_log_handlers():
    """Undo set_level / set_stream calls made by CLI entry points"""
    saved = []
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger) and name.startswith(("deckart", "seeded_svg")):
            streams = [(h, h.stream) for h in logger.handlers if isinstance(h, logging.StreamHandler)]
            saved.append((logger, logger.level, streams))
    yield
    for logger, level, streams in saved:
        logger.setLevel(level)
        for handler, stream in streams:
            handler.setStream(stream)


@pytest.fixture
def default_config():
    """Built-in default configuration"""
    return DecorConfig()


@pytest.fixture
def sample_deck():
    """Two-slide deck with one sized and one unsized container"""
    return SAMPLE_DECK


@pytest.fixture
def scenario_location():
    """Location used by the reference scenario"""
    return Location.from_url("https://example.org/deck/index.html#intro")


def scripted_rng(values):
    """Random stream that replays fixed values, for exercising edge cases"""
    it = iter(values)
    return lambda: next(it)


class CountingRng:
    """Constant random stream that counts how often it is drawn"""

    def __init__(self, value=0.5):
        self.value = value
        self.draws = 0

    def __call__(self):
        self.draws += 1
        return self.value
