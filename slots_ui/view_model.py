from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    id: str
    symbol: str


@dataclass(frozen=True)
class CellView:
    index: int
    card: CardView | None
    spin_symbol: str | None
    selected: bool

    @property
    def shown_symbol(self):
        if self.spin_symbol is not None:
            return self.spin_symbol
        if self.card is not None:
            return self.card.symbol
        return None


@dataclass(frozen=True)
class SelectionView:
    valid_line: bool
    ok: bool
    points: int
    label: str


@dataclass(frozen=True)
class GameViewModel:
    cells: tuple[CellView, ...]
    drawn: CardView | None
    selection: tuple[int, ...]
    selection_info: SelectionView
    score: int
    draws_used: int
    draws_max: int
    deck_count: int
    discard_count: int
    bomb_overlay: bool
    spinning: bool
    game_over: bool
    can_draw: bool
    can_score: bool
    phase: str
    log: tuple[str, ...]


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
