from collections import namedtuple

from slots.Cards import BOMB, CHERRY, CROWN, JEWEL, LABEL, PAYOUT, THREE_CROWNS_PAYOUT

# Lines for a 3x3 grid (indices)
LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

LineResult = namedtuple("LineResult", ["ok", "points", "label"])
SelectionInfo = namedtuple("SelectionInfo", ["validLine", "ok", "points", "label"])

# Highest payout first, so the first qualifying target is the best one.
TARGETS = tuple(sorted(PAYOUT, key=lambda s: PAYOUT[s], reverse=True))


def isLine(selection) -> bool:
    if len(selection) != 3 or len(set(selection)) != 3:
        return False
    return tuple(sorted(selection)) in LINES


def lineLabel(symbol) -> str:
    if symbol == JEWEL:
        return f"3 {LABEL[JEWEL]}s (0)"
    if symbol == CHERRY:
        return "3 Cherries"
    return f"3 {LABEL[symbol]}s"


def evaluateLine(cards) -> LineResult:
    symbols = [card.symbol for card in cards]
    if BOMB in symbols:
        return LineResult(False, 0, "Bombs can't be scored")
    if len(symbols) == 3 and all(s == CROWN for s in symbols):
        return LineResult(True, THREE_CROWNS_PAYOUT, "3 Crowns")
    for target in TARGETS:
        if all(s == CROWN or s == target for s in symbols):
            return LineResult(True, PAYOUT[target], lineLabel(target))
    return LineResult(False, 0, "Not a matching line")


def describeSelection(selection, grid) -> SelectionInfo:
    """
    Summarises the current selection the way the Cash In control presents it.
    """
    if len(selection) != 3:
        return SelectionInfo(False, False, 0, "Select 3 cards")
    if not isLine(selection):
        return SelectionInfo(False, False, 0, "Selection must be a straight line")
    cards = [grid[i] for i in selection if grid[i] is not None]
    if len(cards) != 3:
        return SelectionInfo(True, False, 0, "Invalid selection")
    result = evaluateLine(cards)
    return SelectionInfo(True, result.ok, result.points, result.label)
