import logging
from tkinter import BOTH, Canvas, Tk, messagebox

from PIL import ImageTk

from slots.Core import Core, GameConfig
from slots.Interface import Interface
from slots.Timing import TkScheduler
from slots_ui.adapter import CoreAdapter
from slots_ui.settings_store import load_settings, save_settings
from slots_ui.symbol_face import SymbolFaceRenderer
from slots_ui.ui_config import (
    CELL_GAP_RATIO,
    FONT_SCALE_FACTOR,
    FONT_SCALE_ORDER,
    FPS_MS,
    GRID_SIDE_RATIO,
    GRID_TOP_RATIO,
    LOG_LINES,
    PANEL_WIDTH_RATIO,
    THEMES,
    THEME_ORDER,
    TILE_STYLE_ORDER,
)

logger = logging.getLogger(__name__)


class SlotsTkInterface(Interface):

    def __init__(self, width=960, height=720, config: GameConfig = None):
        super().__init__()
        self.width = width
        self.height = height
        self.config = config or GameConfig()
        self.root = None
        self.canvas = None

        self.vm = None
        self.anim_queue = []
        self.message = ""
        self.active_buttons = []
        self.cell_rects = []
        self.needs_redraw = True

        self.theme_name = "Casino"
        self.font_scale = "Normal"
        self.tile_style = "Drawn"
        self.face_renderer = SymbolFaceRenderer()
        self.tk_image_cache = {}
        self.load_persisted_settings()

    def run(self):
        self.root = Tk()
        self.root.title("SLOTS Solitaire")
        self.root.resizable(True, True)
        self.canvas = Canvas(self.root, width=self.width, height=self.height, highlightthickness=0, bd=0)
        self.canvas.pack(expand=1, fill=BOTH)

        self.root.bind("<Configure>", self.on_resize)
        self.root.bind("<Button-1>", self.on_press)
        self.root.bind("<Key>", self.on_key)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        core = Core(self.config, TkScheduler(self.root))
        core.registerInterface(self)
        core.askNewGame()

        self.tick()
        self.root.mainloop()

    @property
    def theme(self):
        return THEMES[self.theme_name]

    def load_persisted_settings(self):
        settings = load_settings()
        self.theme_name = settings["theme_name"]
        self.font_scale = settings["font_scale"]
        self.tile_style = settings["tile_style"]

    def persist_settings(self):
        save_settings(
            {
                "theme_name": self.theme_name,
                "font_scale": self.font_scale,
                "tile_style": self.tile_style,
            }
        )

    def cycle_value(self, order, current):
        idx = order.index(current)
        return order[(idx + 1) % len(order)]

    def fs(self, base):
        factor = FONT_SCALE_FACTOR[self.font_scale]
        return max(8, int(base * factor))

    def request_redraw(self):
        self.needs_redraw = True

    def on_close(self):
        if not messagebox.askyesno("Quit", "Do you want to quit?"):
            return
        if self.core is not None:
            # late timer callbacks must not reach a destroyed window
            self.core.shutdown()
        logger.info("window closed, saving settings")
        self.persist_settings()
        self.root.destroy()

    # ----- Interface callbacks -----

    def onStart(self):
        self.vm = CoreAdapter.snapshot(self.core)
        self.anim_queue.clear()
        self.message = "Tap 3 cards in a line, then Cash In."
        self.request_redraw()

    def onEvent(self, event):
        self.vm = CoreAdapter.snapshot(self.core)
        self.anim_queue.append(CoreAdapter.event_to_animation(event))
        super().onEvent(event)

    def notifyRedraw(self):
        self.vm = CoreAdapter.snapshot(self.core)
        self.request_redraw()

    def onGameOver(self):
        self.vm = CoreAdapter.snapshot(self.core)
        self.message = f"Game over. Final score: {self.vm.score}"
        self.request_redraw()

    def consume_animation_queue(self):
        while self.anim_queue:
            animation = self.anim_queue.pop(0)
            if animation.type == "SCORE":
                self.message = f"{animation.payload['label']} for {animation.payload['points']}!"
            elif animation.type == "BOMB":
                self.message = "BOOM!"
            elif animation.type == "DRAW" and not animation.payload["bomb"]:
                self.message = "Tap a cell to place the card, or discard it."
            elif animation.type in ("PLACE", "DISCARD"):
                self.message = ""

    # ----- input -----

    def perform(self, action):
        core = self.core
        if action == "new":
            core.askNewGame()
        elif action == "draw":
            if not core.askDraw():
                self.message = "No draws left." if core.drawsUsed >= core.config.drawsMax else ""
        elif action == "discard":
            core.askDiscardDrawn()
        elif action == "score":
            core.askScore()
        elif action == "clear":
            core.askClearSelection()
        elif action == "theme":
            self.theme_name = self.cycle_value(THEME_ORDER, self.theme_name)
            self.persist_settings()
        elif action == "font_scale":
            self.font_scale = self.cycle_value(FONT_SCALE_ORDER, self.font_scale)
            self.persist_settings()
        elif action == "tile_style":
            self.tile_style = self.cycle_value(TILE_STYLE_ORDER, self.tile_style)
            self.persist_settings()
        self.request_redraw()

    def on_press(self, event):
        if self.vm is None:
            return
        for button in self.active_buttons:
            x1, y1, x2, y2 = button["rect"]
            if x1 <= event.x <= x2 and y1 <= event.y <= y2:
                if button.get("enabled", True):
                    self.perform(button["action"])
                return
        for idx, (x1, y1, x2, y2) in enumerate(self.cell_rects):
            if x1 <= event.x <= x2 and y1 <= event.y <= y2:
                self.core.askTapCell(idx)
                return

    def on_key(self, event):
        key = event.keysym.lower()
        if len(key) == 1 and key in "123456789":
            self.core.askTapCell(int(key) - 1)
        elif key == "d":
            self.perform("discard" if self.core.drawn is not None else "draw")
        elif key == "return":
            self.perform("score")
        elif key == "c":
            self.perform("clear")
        elif key == "n":
            self.perform("new")
        elif key == "t":
            self.perform("theme")
        elif key == "f":
            self.perform("font_scale")
        elif key == "s":
            self.perform("tile_style")

    def on_resize(self, event):
        if event.widget is not self.root:
            return
        if event.width == self.width and event.height == self.height:
            return
        self.width = event.width
        self.height = event.height
        self.request_redraw()

    def tick(self):
        self.consume_animation_queue()
        if self.needs_redraw:
            self.draw()
            self.needs_redraw = False
        self.root.after(FPS_MS, self.tick)

    # ----- layout -----

    def grid_geometry(self):
        side = min(self.width * (1 - PANEL_WIDTH_RATIO) - 48, self.height * GRID_SIDE_RATIO)
        gap = side * CELL_GAP_RATIO
        cell = (side - gap * 2) / 3
        x0 = 24
        y0 = self.height * GRID_TOP_RATIO
        return x0, y0, cell, gap

    def cell_rect(self, idx):
        x0, y0, cell, gap = self.grid_geometry()
        row, col = divmod(idx, 3)
        x = x0 + col * (cell + gap)
        y = y0 + row * (cell + gap)
        return x, y, x + cell, y + cell

    def panel_origin(self):
        return self.width * (1 - PANEL_WIDTH_RATIO), 24

    def tk_image(self, pil_image):
        # Tk drops images that are not referenced from Python
        key = id(pil_image)
        cached = self.tk_image_cache.get(key)
        if cached is None or cached[0] is not pil_image:
            cached = (pil_image, ImageTk.PhotoImage(pil_image))
            self.tk_image_cache[key] = cached
        return cached[1]

    # ----- drawing -----

    def draw(self):
        if self.canvas is None:
            return
        c = self.canvas
        c.delete("all")
        self.active_buttons = []
        c.create_rectangle(0, 0, self.width, self.height, fill=self.theme["bg_base"], width=0)
        if self.vm is None:
            return
        self.draw_hud(c)
        self.draw_grid(c)
        self.draw_controls(c)
        self.draw_panel(c)
        if self.vm.bomb_overlay:
            self.draw_bomb_overlay(c)
        if self.vm.game_over and not self.vm.spinning and not self.vm.bomb_overlay:
            self.draw_game_over(c)

    def draw_button(self, c, label, action, fill, rect, enabled=True, text_fill="#f5f5f5"):
        x1, y1, x2, y2 = rect
        self.active_buttons.append({"action": action, "rect": rect, "enabled": enabled})
        button_fill = fill if enabled else self.theme["button_disabled"]
        c.create_rectangle(x1, y1, x2, y2, fill=button_fill, outline=self.theme["panel_border"], width=2)
        c.create_text((x1 + x2) / 2, (y1 + y2) / 2, text=label, fill=text_fill if enabled else "#a8a8b3", font=f"Helvetica {self.fs(14)} bold")

    def draw_hud(self, c):
        theme = self.theme
        vm = self.vm
        c.create_text(24, 20, anchor="nw", text="SLOTS Solitaire", fill=theme["hud_text"], font=f"Helvetica {self.fs(24)} bold")
        c.create_text(
            24,
            60,
            anchor="nw",
            text=f"Score: {vm.score}    Draws: {vm.draws_used}/{vm.draws_max}    Deck: {vm.deck_count}",
            fill=theme["hud_subtext"],
            font=f"Helvetica {self.fs(14)} bold",
        )
        c.create_text(24, self.height - 20, anchor="sw", text=self.message, fill=theme["hud_subtext"], font=f"Helvetica {self.fs(12)}")

    def draw_grid(self, c):
        theme = self.theme
        self.cell_rects = []
        for cell in self.vm.cells:
            x1, y1, x2, y2 = self.cell_rect(cell.index)
            self.cell_rects.append((x1, y1, x2, y2))
            symbol = cell.shown_symbol
            fill = theme["cell_fill"] if symbol is not None else theme["cell_empty"]
            c.create_rectangle(x1, y1, x2, y2, fill=fill, outline=theme["panel_border"], width=1)
            if symbol is not None:
                size = max(8, int(x2 - x1) - 4)
                img = self.face_renderer.render_tile(symbol, size, self.theme_name, self.tile_style)
                c.create_image(x1 + 2, y1 + 2, anchor="nw", image=self.tk_image(img))
            if cell.selected:
                c.create_rectangle(x1, y1, x2, y2, outline=theme["cell_select"], width=4)
            c.create_text(x1 + 8, y1 + 6, anchor="nw", text=str(cell.index + 1), fill="#7a7a86", font=f"Helvetica {self.fs(10)}")

    def draw_controls(self, c):
        theme = self.theme
        vm = self.vm
        _, _, grid_x2, grid_y2 = self.cell_rect(8)
        x0, _, _, _ = self.cell_rect(0)
        y = grid_y2 + 16
        bh = 48
        busy = vm.spinning or vm.bomb_overlay

        score_label = "Cash In" if vm.selection_info.ok else "Select Winning Cards"
        if vm.selection_info.ok:
            score_label = f"Cash In ({vm.selection_info.points})"
        clear_w = 90 if vm.selection else 0
        self.draw_button(
            c, score_label, "score", theme["button_primary"],
            (x0, y, grid_x2 - clear_w - (8 if clear_w else 0), y + bh),
            enabled=vm.can_score, text_fill="#111111",
        )
        if vm.selection:
            self.draw_button(c, "Clear", "clear", theme["button"], (grid_x2 - clear_w, y, grid_x2, y + bh), enabled=not busy)

        y += bh + 12
        box = bh * 2
        if vm.drawn is not None:
            img = self.face_renderer.render_tile(vm.drawn.symbol, box, self.theme_name, self.tile_style)
        else:
            img = self.face_renderer.render_back(box, self.theme_name, self.tile_style)
        c.create_image(x0, y, anchor="nw", image=self.tk_image(img))
        c.create_text(x0 + box + 12, y + 4, anchor="nw", text=vm.selection_info.label, fill=theme["hud_subtext"], font=f"Helvetica {self.fs(12)}")
        if vm.drawn is not None:
            self.draw_button(c, "Discard", "discard", theme["button"], (x0 + box + 12, y + box - bh, x0 + box + 172, y + box), enabled=not busy)
        else:
            self.draw_button(
                c, "Draw", "draw", theme["button_draw"],
                (x0 + box + 12, y + box - bh, x0 + box + 172, y + box),
                enabled=vm.can_draw, text_fill="#08110d",
            )
        self.draw_button(c, "New Game", "new", theme["button"], (grid_x2 - 140, y + box - bh, grid_x2, y + box))

    def draw_panel(self, c):
        theme = self.theme
        px, py = self.panel_origin()
        pw = self.width - px - 24
        c.create_rectangle(px, py, px + pw, self.height - 48, fill=theme["panel"], outline=theme["panel_border"], width=1)
        c.create_text(px + 12, py + 12, anchor="nw", text="Log", fill=theme["hud_text"], font=f"Helvetica {self.fs(14)} bold")
        line_h = self.fs(12) + 10
        for i, text in enumerate(self.vm.log[-LOG_LINES:]):
            c.create_text(px + 12, py + 44 + i * line_h, anchor="nw", width=pw - 24, text=text, fill=theme["hud_subtext"], font=f"Helvetica {self.fs(11)}")

        by = self.height - 48 - 3 * 40
        self.draw_button(c, f"Theme: {self.theme_name}", "theme", theme["button"], (px + 12, by, px + pw - 12, by + 32))
        self.draw_button(c, f"Font: {self.font_scale}", "font_scale", theme["button"], (px + 12, by + 40, px + pw - 12, by + 72))
        self.draw_button(c, f"Tiles: {self.tile_style}", "tile_style", theme["button"], (px + 12, by + 80, px + pw - 12, by + 112))

    def draw_bomb_overlay(self, c):
        x1, y1, _, _ = self.cell_rect(0)
        _, _, x2, y2 = self.cell_rect(8)
        c.create_rectangle(x1, y1, x2, y2, fill=self.theme["overlay"], stipple="gray50", width=0)
        size = int(min(x2 - x1, y2 - y1) * 0.7)
        img = self.face_renderer.render_tile("bomb", size, self.theme_name, self.tile_style)
        c.create_image((x1 + x2) / 2, (y1 + y2) / 2, image=self.tk_image(img))
        c.create_text((x1 + x2) / 2, y2 - 24, text="BOMB!", fill="#f97316", font=f"Helvetica {self.fs(30)} bold")

    def draw_game_over(self, c):
        # kept beside the grid, scoring is still allowed after the last draw
        theme = self.theme
        px, _ = self.panel_origin()
        x1 = px + 12
        x2 = self.width - 36
        y2 = self.height - 48 - 3 * 40 - 12
        y1 = y2 - 132
        c.create_rectangle(x1, y1, x2, y2, fill=theme["bg_base"], outline=theme["cell_select"], width=2)
        cx = (x1 + x2) / 2
        c.create_text(cx, y1 + 22, text=f"Game over: {self.vm.draws_max} draws used", fill=theme["hud_text"], font=f"Helvetica {self.fs(13)} bold")
        c.create_text(cx, y1 + 50, text=f"Final score: {self.vm.score}", fill=theme["hud_subtext"], font=f"Helvetica {self.fs(12)}")
        self.draw_button(c, "Play again", "new", theme["button_primary"], (x1 + 12, y2 - 52, x2 - 12, y2 - 12), text_fill="#111111")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    SlotsTkInterface().run()


if __name__ == "__main__":
    main()
