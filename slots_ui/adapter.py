from slots.Core import (
    BoardWiped,
    BombTriggered,
    Core,
    DealGrid,
    DiscardDrawn,
    DrawCard,
    GameEvent,
    PlaceCard,
    ScoreLine,
    SpinCommitted,
)
from slots_ui.view_model import AnimationEvent, CardView, CellView, GameViewModel, SelectionView


def _card_view(card):
    if card is None:
        return None
    return CardView(id=card.id, symbol=card.symbol)


class CoreAdapter:
    """Bridges the Core state/events to a renderer-friendly model."""

    @staticmethod
    def snapshot(core: Core) -> GameViewModel:
        overrides = core.timing.overrides
        cells = []
        for idx, card in enumerate(core.grid):
            spin_symbol = overrides[idx]
            cells.append(
                CellView(
                    index=idx,
                    # cells under a spin show only the spin symbol until the commit
                    card=None if spin_symbol is not None else _card_view(card),
                    spin_symbol=spin_symbol,
                    selected=idx in core.selected,
                )
            )
        info = core.selectionInfo()
        deck = core.deck
        return GameViewModel(
            cells=tuple(cells),
            drawn=_card_view(core.drawn),
            selection=tuple(core.selected),
            selection_info=SelectionView(
                valid_line=info.validLine,
                ok=info.ok,
                points=info.points,
                label=info.label,
            ),
            score=core.score,
            draws_used=core.drawsUsed,
            draws_max=core.config.drawsMax,
            deck_count=0 if deck is None else deck.remaining(),
            discard_count=0 if deck is None else deck.discardCount(),
            bomb_overlay=core.bombOverlay,
            spinning=core.isSpinning(),
            game_over=core.isGameOver(),
            can_draw=core.canInteract() and core.canDraw(),
            can_score=core.canScore(),
            phase=core.phase().value,
            log=core.log.entries(),
        )

    @staticmethod
    def event_to_animation(event: GameEvent) -> AnimationEvent:
        if isinstance(event, DealGrid):
            return AnimationEvent(
                type="SPIN",
                payload={"cells": event.cells},
            )
        if isinstance(event, SpinCommitted):
            return AnimationEvent(
                type="COMMIT",
                payload={"cells": event.cells},
            )
        if isinstance(event, DrawCard):
            return AnimationEvent(
                type="DRAW",
                payload={"bomb": event.card.isBomb()},
            )
        if isinstance(event, DiscardDrawn):
            return AnimationEvent(
                type="DISCARD",
                payload={"symbol": event.card.symbol},
            )
        if isinstance(event, PlaceCard):
            return AnimationEvent(
                type="PLACE",
                payload={"cell": event.idx, "displaced": event.displaced is not None},
            )
        if isinstance(event, ScoreLine):
            return AnimationEvent(
                type="SCORE",
                payload={"cells": event.cells, "points": event.points, "label": event.label},
            )
        if isinstance(event, BombTriggered):
            return AnimationEvent(
                type="BOMB",
                payload={"reason": event.reason},
            )
        if isinstance(event, BoardWiped):
            return AnimationEvent(
                type="WIPE",
                payload={"count": len(event.wiped), "reason": event.reason},
            )
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})
