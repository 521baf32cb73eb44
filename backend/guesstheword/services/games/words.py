import random
from typing import List, Optional

# The fixed word list; the front of a shuffled copy is the next word to guess
WORDS = (
    'queen', 'hospital', 'basketball', 'cat', 'change',
    'snail', 'soup', 'calendar', 'sad', 'desk', 'guitar', 'home',
    'railway', 'zebra', 'jelly', 'car', 'crow', 'trade', 'bag', 'roll',
    'bubble',
)


def shuffled_words(rng: Optional[random.Random] = None) -> List[str]:
    """Return a freshly shuffled, mutable copy of WORDS."""
    words = list(WORDS)
    (rng or random).shuffle(words)
    return words
