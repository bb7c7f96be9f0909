import logging
import random
from enum import Enum

from slots.Cards import DECK_SIZE, LABEL, buildDeck, containsBomb, shuffled
from slots.Deck import DeckManager
from slots.Lines import describeSelection
from slots.Timing import BOMB_DELAY_MS, SPIN_MS, SPIN_TICK_MS, ManualScheduler, SpinCoordinator

logger = logging.getLogger(__name__)

DRAWS_MAX = 25
GRID_SIZE = 9
LOG_SIZE = 12


class GameConfig:
    def __init__(self, seed=None):
        self.drawsMax = DRAWS_MAX
        self.gridSize = GRID_SIZE
        self.spinMs = SPIN_MS
        self.spinTickMs = SPIN_TICK_MS
        self.bombDelayMs = BOMB_DELAY_MS
        self.logSize = LOG_SIZE
        # only makes shuffles reproducible, the rules are fixed
        self.seed = seed


class Phase(Enum):
    INIT = "init"
    SPINNING = "spinning"
    IDLE = "idle"
    AWAITING_PLACEMENT = "awaiting_placement"
    BOMB_PENDING = "bomb_pending"
    GAME_OVER = "game_over"


class GameEvent:
    def describe(self):
        """
        :return: the line for the player's event log, or None
        """
        return None


class DealGrid(GameEvent):
    def __init__(self, cells, cards):
        self.cells = tuple(cells)
        self.cards = tuple(cards)


class SpinCommitted(GameEvent):
    def __init__(self, cells):
        self.cells = tuple(cells)


class DrawCard(GameEvent):
    def __init__(self, card):
        self.card = card

    def describe(self):
        if self.card.isBomb():
            return None
        return f"Drew {LABEL[self.card.symbol]}."


class DiscardDrawn(GameEvent):
    def __init__(self, card):
        self.card = card

    def describe(self):
        return f"Discarded {LABEL[self.card.symbol]}."


class PlaceCard(GameEvent):
    def __init__(self, idx, card, displaced):
        self.idx = idx
        self.card = card
        self.displaced = displaced

    def describe(self):
        return f"Replaced cell {self.idx + 1} with {LABEL[self.card.symbol]}."


class ScoreLine(GameEvent):
    def __init__(self, cells, cards, points, label):
        self.cells = tuple(cells)
        self.cards = tuple(cards)
        self.points = points
        self.label = label

    def describe(self):
        return f"Scored {self.label} for {self.points}."


class BombTriggered(GameEvent):
    def __init__(self, reason):
        self.reason = reason


class BoardWiped(GameEvent):
    def __init__(self, wiped, reason):
        self.wiped = tuple(wiped)
        self.reason = reason

    def describe(self):
        return f"Bomb triggered ({self.reason}). Board wiped + redealt."


class EventLog:
    """Keeps the most recent lines only."""

    def __init__(self, limit=LOG_SIZE):
        self.limit = limit
        self.lst = []

    def push(self, text):
        self.lst.append(text)
        if len(self.lst) > self.limit:
            self.lst = self.lst[len(self.lst) - self.limit:]

    def clear(self):
        self.lst = []

    def entries(self):
        return tuple(self.lst)

    def __len__(self):
        return len(self.lst)


class Core:
    """
    ask*** : player input, returns False and changes nothing when its guard is unmet
    do*** : actual operation, no guard checks.

    Visual transitions are delegated to a SpinCoordinator. Authoritative cards are
    written to the grid when they are dealt; the coordinator only delays the commit
    that re-enables input and checks for bombs.
    """

    def __init__(self, config: GameConfig = None, scheduler=None):
        self.config = config or GameConfig()
        self.interface = None
        self.scheduler = scheduler or ManualScheduler()
        self.rng = random.Random(self.config.seed)
        self.timing = SpinCoordinator(
            self.scheduler,
            rng=random.Random(),
            onChange=self.notifyRedraw,
            gridSize=self.config.gridSize,
            tickMs=self.config.spinTickMs,
            spinMs=self.config.spinMs,
        )

        self.deck: DeckManager = None
        self.grid = [None] * self.config.gridSize
        self.drawn = None  # card awaiting placement or discard
        self.selected = []
        self.score = 0
        self.drawsUsed = 0
        self.bombOverlay = False
        self.started = False
        self.gameOverAnnounced = False
        self.log = EventLog(self.config.logSize)

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    # ----- derived state -----

    def phase(self) -> Phase:
        if not self.started:
            return Phase.INIT
        if self.bombOverlay:
            return Phase.BOMB_PENDING
        if self.timing.isSpinning():
            return Phase.SPINNING
        if self.drawn is not None:
            return Phase.AWAITING_PLACEMENT
        if self.drawsUsed >= self.config.drawsMax:
            return Phase.GAME_OVER
        return Phase.IDLE

    def isSpinning(self):
        return self.timing.isSpinning()

    def isAnimating(self):
        return self.bombOverlay or self.timing.isSpinning()

    def canInteract(self):
        return self.started and not self.isAnimating()

    def canDraw(self):
        return self.drawsUsed < self.config.drawsMax and self.drawn is None

    def isGameOver(self):
        return self.started and self.drawsUsed >= self.config.drawsMax and self.drawn is None

    def selectionInfo(self):
        return describeSelection(self.selected, self.grid)

    def canScore(self):
        return self.canInteract() and self.drawn is None and self.selectionInfo().ok

    def cardCount(self):
        count = 0 if self.deck is None else len(self.deck)
        count += sum(1 for card in self.grid if card is not None)
        if self.drawn is not None:
            count += 1
        return count

    # ----- player input -----

    def askNewGame(self) -> bool:
        if self.interface is None:
            raise RuntimeError("interface is null")
        self.timing.cancelAll()
        self.bombOverlay = False

        self.deck = DeckManager(shuffled(buildDeck(), self.rng), [], self.rng)
        self.grid = [None] * self.config.gridSize
        self.drawn = None
        self.selected = []
        self.score = 0
        self.drawsUsed = 0
        self.gameOverAnnounced = False
        self.log.clear()
        self.started = True
        assert self.cardCount() == DECK_SIZE

        logger.info("new game started")
        self.interface.onStart()
        self.pushLog("New game started")
        self.doDeal(range(self.config.gridSize), "Bomb appeared on deal")
        return True

    def askDraw(self) -> bool:
        if not self.canInteract() or not self.canDraw():
            return False
        card = self.deck.takeTop()
        if card is None:
            # the draw budget is only spent on a card actually obtained
            logger.warning("draw attempted with no card available")
            return False
        self.drawsUsed += 1
        self.selected = []
        if card.isBomb():
            # never shown to the player
            self.deck.discard(card)
            self.emit(DrawCard(card))
            self.triggerBomb("draw")
        else:
            self.drawn = card
            self.emit(DrawCard(card))
        self.checkGameOver()
        return True

    def askDiscardDrawn(self) -> bool:
        if not self.canInteract() or self.drawn is None:
            return False
        card = self.drawn
        self.drawn = None
        self.deck.discard(card)
        self.selected = []
        self.emit(DiscardDrawn(card))
        self.checkGameOver()
        return True

    def askTapCell(self, idx: int) -> bool:
        if not self.canInteract():
            return False
        if idx < 0 or idx >= self.config.gridSize:
            return False
        if self.drawn is not None:
            self.doPlace(idx)
            return True
        return self.doToggle(idx)

    def askClearSelection(self) -> bool:
        if not self.canInteract() or len(self.selected) == 0:
            return False
        self.selected = []
        self.notifyRedraw()
        return True

    def askScore(self) -> bool:
        if not self.canInteract() or self.drawn is not None:
            return False
        info = self.selectionInfo()
        if not info.ok:
            return False
        self.doScore(info.points, info.label)
        return True

    # ----- operations -----

    def doToggle(self, idx):
        if idx in self.selected:
            self.selected = [i for i in self.selected if i != idx]
        elif len(self.selected) < 3:
            self.selected = self.selected + [idx]
        else:
            return False
        self.notifyRedraw()
        return True

    def doPlace(self, idx):
        placed = self.drawn
        self.drawn = None
        self.selected = []
        old = self.grid[idx]
        self.grid[idx] = placed
        self.deck.discard(old)
        self.emit(PlaceCard(idx, placed, old))
        if placed.isBomb():
            self.triggerBomb("placed")
        self.checkGameOver()

    def doScore(self, points, label):
        slots = sorted(self.selected)
        cards = [self.grid[i] for i in slots]
        self.score += points
        for i in slots:
            self.grid[i] = None
        self.deck.discard(*cards)
        self.selected = []
        self.emit(ScoreLine(slots, cards, points, label))
        self.doDeal(slots, "bomb appeared on refill")

    def doDeal(self, cells, reason):
        """
        Deals into the given empty cells and spins them. A bomb among the dealt
        cards starts the bomb sequence once the spin commits.
        """
        cells = tuple(cells)
        dealt = self.deck.dealN(len(cells))
        for k, i in enumerate(cells):
            self.grid[i] = dealt[k] if k < len(dealt) else None
        self.emit(DealGrid(cells, dealt))
        self.timing.spin(cells, lambda: self.commitDeal(cells, reason))

    def commitDeal(self, cells, reason):
        self.emit(SpinCommitted(cells))
        if containsBomb(self.grid[i] for i in cells):
            self.triggerBomb(reason)
        self.checkGameOver()

    def triggerBomb(self, reason) -> bool:
        if self.bombOverlay:
            return False
        self.selected = []
        if self.drawn is not None:
            self.deck.discard(self.drawn)
            self.drawn = None
        self.bombOverlay = True
        self.timing.hold(self.config.bombDelayMs, lambda: self.detonate(reason))
        logger.info("bomb triggered (%s)", reason)
        self.emit(BombTriggered(reason))
        return True

    def detonate(self, reason):
        wiped = [card for card in self.grid if card is not None]
        self.deck.discard(*wiped)
        self.grid = [None] * self.config.gridSize
        self.bombOverlay = False
        self.emit(BoardWiped(wiped, reason))
        self.doDeal(range(self.config.gridSize), "Bomb appeared on redeal")

    def checkGameOver(self):
        if self.gameOverAnnounced or self.isAnimating() or not self.isGameOver():
            return False
        self.gameOverAnnounced = True
        logger.info("game over with score %d", self.score)
        self.interface.onGameOver()
        return True

    def shutdown(self):
        self.timing.cancelAll()

    # ----- notifications -----

    def pushLog(self, text):
        self.log.push(text)

    def emit(self, event: GameEvent):
        text = event.describe()
        if text is not None:
            self.pushLog(text)
        if self.interface is not None:
            self.interface.onEvent(event)

    def notifyRedraw(self):
        if self.interface is not None:
            self.interface.notifyRedraw()
