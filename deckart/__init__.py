"""
deckart - deterministic decorative artwork for HTML slide decks.
"""

__version__ = "0.1.0"
