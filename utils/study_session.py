"""
Flashcard study session over a snapshot of the notebook
"""
from typing import Any, Dict, Sequence, Tuple
from loguru import logger
from models import SavedWord


class StudySequencer:
    """Cyclic flashcard traversal.

    The words are copied into an immutable snapshot when the session
    starts, so later notebook edits never shift the current position.
    """

    def __init__(self, words: Sequence[SavedWord]):
        if not words:
            raise ValueError("Cannot study an empty notebook")
        self.cards: Tuple[SavedWord, ...] = tuple(words)
        self.current_index = 0
        self.revealed = False
        logger.info(f"Study session started with {len(self.cards)} cards")

    @property
    def length(self) -> int:
        return len(self.cards)

    @property
    def current(self) -> SavedWord:
        return self.cards[self.current_index]

    @property
    def position(self) -> int:
        """1-based position for "n / N" display"""
        return self.current_index + 1

    def advance(self) -> SavedWord:
        self.revealed = False
        self.current_index = (self.current_index + 1) % len(self.cards)
        return self.current

    def reveal(self) -> None:
        self.revealed = True

    def unreveal(self) -> None:
        self.revealed = False

    def flip(self) -> bool:
        self.revealed = not self.revealed
        return self.revealed

    def to_dict(self) -> Dict[str, Any]:
        card = self.current
        view: Dict[str, Any] = {
            "position": self.position,
            "length": self.length,
            "revealed": self.revealed,
            "front": {
                "id": card.id,
                "term": card.term,
                "pronunciation": card.pronunciation,
                "imageUrl": card.image_url,
            },
        }
        if self.revealed:
            view["back"] = {
                "definition": card.definition,
                "example": card.examples[0].to_dict() if card.examples else None,
            }
        return view
