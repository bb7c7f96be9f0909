import argparse
import logging

from slots.Cards import LABEL
from slots.Core import Core, GameConfig
from slots.Interface import Interface
from slots.Timing import ManualScheduler

SHORT = {
    "crown": "CRN",
    "diamond": "DIA",
    "present": "PRS",
    "seven": " 7 ",
    "bar": "BAR",
    "cherry": "CHR",
    "jewel": "JWL",
    "bomb": "BMB",
}


class CommandLineInterface(Interface):

    def printAll(self):
        core = self.core
        print(f"Score: {core.score}        Draws: {core.drawsUsed}/{core.config.drawsMax}        Deck: {core.deck.remaining()}")
        for row in range(3):
            line = ""
            for col in range(3):
                idx = row * 3 + col
                card = core.grid[idx]
                text = "---" if card is None else SHORT[card.symbol]
                mark = "*" if idx in core.selected else " "
                line += f"{idx + 1}:{text}{mark}  "
            print(line)
        if core.drawn is not None:
            print(f"Drawn: {LABEL[core.drawn.symbol]} (type a cell number to place it, or 'discard')")
        if len(core.selected) > 0:
            print(f"Selection: {core.selectionInfo().label}")
        print()

    def onStart(self):
        print("Game started!")

    def onEvent(self, event):
        text = event.describe()
        if text is not None:
            print("> " + text)

    def onGameOver(self):
        print(f"Game over! {self.core.config.drawsMax} draws used. Final score: {self.core.score}")


def flush(core):
    # play every spin and bomb hold to the end, then show the board
    core.scheduler.runUntilIdle()
    core.interface.printAll()


def main():
    parser = argparse.ArgumentParser(description="SLOTS Solitaire in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level.")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    interface = CommandLineInterface()
    core = Core(GameConfig(seed=args.seed), ManualScheduler())
    core.registerInterface(interface)
    core.askNewGame()
    flush(core)
    while True:
        try:
            command = input().strip().lower()
        except EOFError:
            break
        if command in ("q", "quit"):
            break
        if command.isdigit():
            if not core.askTapCell(int(command) - 1):
                print("Invalid cell!")
        elif command.startswith("draw"):
            if not core.askDraw():
                print("Cannot draw!")
        elif command.startswith("discard"):
            if not core.askDiscardDrawn():
                print("Nothing to discard!")
        elif command.startswith("score") or command.startswith("cash"):
            if not core.askScore():
                print("Not a winning line!")
        elif command.startswith("clear"):
            core.askClearSelection()
        elif command.startswith("new"):
            core.askNewGame()
        else:
            print("Invalid command!")
            continue
        flush(core)
    core.shutdown()


if __name__ == '__main__':
    main()
