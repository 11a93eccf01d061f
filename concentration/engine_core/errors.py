"""Engine errors. Player mistakes are no-ops; only collaborator bugs raise."""


class InvalidCardError(ValueError):
    """A card id outside the deck was passed to the engine."""

    def __init__(self, card_id, deck_size: int):
        self.card_id = card_id
        self.deck_size = deck_size
        super().__init__(f"Card id {card_id!r} out of range [0, {deck_size})")
