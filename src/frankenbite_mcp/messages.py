"""Messages shown when a search comes back empty."""

import random

NOT_FOUND_MESSAGES = [
    "Nope, they never said that!",
    "This phrase doesn't exist in the universe of this transcript.",
    "Not even with creative editing could we make them say that!",
    "Your search has gone beyond the boundaries of reality.",
    "Even frankenbiting can't make this happen.",
    "The perfect quote exists only in your imagination.",
    "We've searched high and low, but this one's not in the transcript.",
    "Maybe they said it off camera?",
    "The transcript says no, but your determination says yes!",
    "That's a great quote, but it's not in the transcript.",
    "Nice try! Finding alternative phrases instead...",
    "We've scoured every word, but couldn't assemble this phrase.",
    "Your subject wasn't quite so eloquent, try something simpler?",
]


def get_not_found_message(rng: random.Random | None = None) -> str:
    """Pick a not-found message; pass ``rng`` for a reproducible choice."""
    return (rng or random).choice(NOT_FOUND_MESSAGES)
