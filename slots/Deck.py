import logging
import random

from slots.Cards import shuffled

logger = logging.getLogger(__name__)


class DeckManager:
    """
    Owns the draw pile and the discard pile.
    Cards leave the draw pile from the front only; the discard pile is only
    ever emptied as a whole when it is reshuffled into a new draw pile.
    """

    def __init__(self, drawPile=None, discardPile=None, rng=None):
        self.drawPile = list(drawPile or [])
        self.discardPile = list(discardPile or [])
        self.rng = rng or random.Random()

    def ensureAvailable(self):
        if len(self.drawPile) > 0:
            return
        if len(self.discardPile) == 0:
            # deck exhausted, every card is on the grid or held
            logger.debug("draw and discard piles are both empty")
            return
        logger.debug("reshuffling %d discarded cards into the draw pile", len(self.discardPile))
        self.drawPile = shuffled(self.discardPile, self.rng)
        self.discardPile = []

    def takeTop(self):
        """
        :return: the front card of the draw pile, or None if no card is available
        """
        self.ensureAvailable()
        if len(self.drawPile) == 0:
            return None
        return self.drawPile.pop(0)

    def dealN(self, n):
        out = []
        for _ in range(n):
            card = self.takeTop()
            if card is None:
                break
            out.append(card)
        return out

    def discard(self, *cards):
        for card in cards:
            if card is not None:
                self.discardPile.append(card)

    def remaining(self):
        return len(self.drawPile)

    def discardCount(self):
        return len(self.discardPile)

    def __len__(self):
        return len(self.drawPile) + len(self.discardPile)
