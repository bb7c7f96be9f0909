import random

CROWN = "crown"
DIAMOND = "diamond"
PRESENT = "present"
SEVEN = "seven"
BAR = "bar"
CHERRY = "cherry"
JEWEL = "jewel"
BOMB = "bomb"

# Deck composition (total 80)
DECK_COUNTS = {
    CROWN: 8,  # wild
    DIAMOND: 8,
    PRESENT: 10,
    SEVEN: 12,
    BAR: 14,
    CHERRY: 16,
    JEWEL: 22,  # scores 0 but can be cashed in
    BOMB: 2,
}
SYMBOLS = tuple(DECK_COUNTS)
DECK_SIZE = sum(DECK_COUNTS.values())

# Crown and bomb have no fixed payout.
PAYOUT = {
    DIAMOND: 500,
    PRESENT: 400,
    SEVEN: 300,
    BAR: 200,
    CHERRY: 100,
    JEWEL: 0,
}
THREE_CROWNS_PAYOUT = 1000

LABEL = {
    CROWN: "Crown (Wild)",
    DIAMOND: "Diamond",
    PRESENT: "Present",
    SEVEN: "7",
    BAR: "BAR",
    CHERRY: "Cherry",
    JEWEL: "Jewel",
    BOMB: "Bomb",
}


class Card:
    __slots__ = ("id", "symbol")

    def __init__(self, id, symbol):
        if symbol not in DECK_COUNTS:
            raise ValueError(f"unknown symbol: {symbol!r}")
        self.id = id
        self.symbol = symbol

    def isBomb(self):
        return self.symbol == BOMB

    def isWild(self):
        return self.symbol == CROWN

    def label(self):
        return LABEL[self.symbol]

    def __str__(self):
        return self.id

    def __repr__(self):
        return f"Card({self.id!r}, {self.symbol!r})"


def buildDeck():
    """
    Builds the full 80-card multiset in composition order.
    Ids are unique within one deck: "<symbol>_<n>".
    """
    deck = []
    for symbol, count in DECK_COUNTS.items():
        for n in range(count):
            deck.append(Card(f"{symbol}_{n}", symbol))
    return deck


def shuffled(cards, rng=None):
    rng = rng or random
    lst = list(cards)
    rng.shuffle(lst)
    return lst


def containsBomb(cards):
    return any(card is not None and card.isBomb() for card in cards)
