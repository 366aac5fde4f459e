from __future__ import annotations

"""Tkinter front end for the daily question.

Draws whatever `SessionController.render()` describes: badges, options or
flashcard, the diagram canvas, feedback and the stats bar. Mouse and touch
style drags arrive as press/motion/release events on the canvas and are
handed to the controller's pointer handlers; everything else is a button.
"""

import sys
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Dict, Optional

from ..bank.loader import BankError
from ..config.config import load_config, validate_config
from ..diagrams.base_diagram import DiagramView, EntityView
from .events import ANSWER_RECORDED, QUESTION_CHANGED, STATS_CHANGED
from .screen import ScreenView
from .session_controller import SessionController

FILL = {
    "backdrop": "#f2f2f2",
    "selectable": "#ffffff",
    "selected": "#cfe3ff",
    "correct": "#c8f0c8",
    "incorrect": "#f6c6c6",
    "disabled": "#e4e4e4",
    "drop-zone": "#fafafa",
    "drag-over": "#fff3c4",
    "pool": "#eef2f7",
    "draggable": "#dde8ff",
    "dragging": "#b9d0ff",
}
# Later classes win when several apply.
PRIORITY = ("backdrop", "pool", "drop-zone", "selectable", "draggable", "disabled",
            "selected", "drag-over", "dragging", "correct", "incorrect")


def entity_fill(e: EntityView) -> str:
    fill = "#ffffff"
    for cls in PRIORITY:
        if cls in e.classes:
            fill = FILL[cls]
    return fill


class App(tk.Tk):
    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self.ctrl = controller
        self.title("Daily Kafka Question")
        self.geometry(f"{controller.canvas.width + 60}x{controller.canvas.height + 380}")

        self._build_header()
        self._build_body()
        self._build_footer()

        bus = controller.bus
        bus.subscribe(QUESTION_CHANGED, lambda _p: self.refresh())
        bus.subscribe(ANSWER_RECORDED, lambda _p: self.refresh())
        bus.subscribe(STATS_CHANGED, lambda _p: self.refresh())

    # --- layout ---

    def _build_header(self) -> None:
        bar = ttk.Frame(self)
        bar.pack(side=tk.TOP, fill=tk.X, padx=10, pady=(10, 4))
        self.lbl_category = ttk.Label(bar, text="")
        self.lbl_category.pack(side=tk.LEFT)
        self.lbl_difficulty = ttk.Label(bar, text="")
        self.lbl_difficulty.pack(side=tk.LEFT, padx=8)
        self.lbl_day = ttk.Label(bar, text="")
        self.lbl_day.pack(side=tk.RIGHT)

        nav = ttk.Frame(self)
        nav.pack(side=tk.TOP, fill=tk.X, padx=10)
        self.btn_browse = ttk.Button(nav, text="Browse all", command=self._toggle_browse)
        self.btn_browse.pack(side=tk.LEFT)
        self.btn_prev = ttk.Button(nav, text="< Prev", command=self.ctrl.browse_prev)
        self.btn_next = ttk.Button(nav, text="Next >", command=self.ctrl.browse_next)
        self.lbl_position = ttk.Label(nav, text="")
        self.btn_mode = ttk.Button(nav, text="Flashcard mode", command=self._toggle_mode)
        self.btn_mode.pack(side=tk.RIGHT)

    def _build_body(self) -> None:
        body = ttk.Frame(self)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=10, pady=6)
        self.lbl_question = ttk.Label(body, text="", wraplength=self.ctrl.canvas.width, font=("TkDefaultFont", 12, "bold"))
        self.lbl_question.pack(side=tk.TOP, anchor=tk.W, pady=(0, 6))

        self.options_frame = ttk.Frame(body)
        self.flash_frame = ttk.Frame(body)
        self.lbl_answer = ttk.Label(self.flash_frame, text="", wraplength=self.ctrl.canvas.width)
        self.lbl_answer.pack(side=tk.TOP, anchor=tk.W)
        self.btn_reveal = ttk.Button(self.flash_frame, text="Reveal answer", command=lambda: self._run(self.ctrl.reveal_flashcard))
        self.btn_reveal.pack(side=tk.TOP, anchor=tk.W, pady=4)

        self.diagram_frame = ttk.Frame(body)
        self.lbl_hint = ttk.Label(self.diagram_frame, text="")
        self.lbl_hint.pack(side=tk.TOP, anchor=tk.W)
        self.canvas = tk.Canvas(
            self.diagram_frame,
            width=self.ctrl.canvas.width,
            height=self.ctrl.canvas.height,
            bg="white",
            highlightthickness=1,
            highlightbackground="#cccccc",
        )
        self.canvas.pack(side=tk.TOP)
        self.btn_submit = ttk.Button(self.diagram_frame, text="Submit", command=lambda: self._run(self.ctrl.submit))
        self.btn_submit.pack(side=tk.TOP, anchor=tk.E, pady=4)
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_motion)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)

        self.lbl_feedback = ttk.Label(body, text="", wraplength=self.ctrl.canvas.width, justify=tk.LEFT)
        self.lbl_feedback.pack(side=tk.BOTTOM, anchor=tk.W, pady=6)

    def _build_footer(self) -> None:
        bar = ttk.Frame(self)
        bar.pack(side=tk.BOTTOM, fill=tk.X, padx=10, pady=(4, 10))
        self.lbl_stats = ttk.Label(bar, text="")
        self.lbl_stats.pack(side=tk.LEFT)

    # --- actions ---

    def _toggle_browse(self) -> None:
        if self.ctrl.state.browse_mode:
            self.ctrl.exit_browse()
        else:
            self.ctrl.enter_browse()

    def _toggle_mode(self) -> None:
        self.ctrl.set_mode("flashcard" if self.ctrl.state.mode == "quiz" else "quiz")
        self.refresh()

    def _run(self, action) -> None:
        action()
        self.refresh()

    def _select(self, index: int) -> None:
        self.ctrl.select_option(index)
        self.refresh()

    def _on_press(self, event: Any) -> None:
        view = self.ctrl.diagram_view()
        if view is None:
            return
        if view.interaction == "drag":
            self.ctrl.pointer_down(event.x, event.y)
        else:
            self.ctrl.click_at(event.x, event.y)
        self.refresh()

    def _on_motion(self, event: Any) -> None:
        if self.ctrl.state.drag is not None:
            self.ctrl.pointer_move(event.x, event.y)
            self.draw_diagram(self.ctrl.diagram_view())

    def _on_release(self, event: Any) -> None:
        if self.ctrl.state.drag is not None:
            self.ctrl.pointer_up(event.x, event.y)
            self.refresh()

    # --- drawing ---

    def refresh(self) -> None:
        view = self.ctrl.render()
        if view.error == "empty_bank":
            self.lbl_question.configure(text="No questions available.")
            return
        self._draw_header(view)
        self.lbl_question.configure(text=view.question_text)
        for frame in (self.options_frame, self.flash_frame, self.diagram_frame):
            frame.pack_forget()
        if view.diagram is not None:
            self.diagram_frame.pack(side=tk.TOP, anchor=tk.W)
            self.lbl_hint.configure(text=view.diagram.hint)
            self.draw_diagram(view.diagram)
            show_submit = view.diagram.interaction == "drag" or view.diagram.multi_select
            self.btn_submit.configure(state=tk.NORMAL if view.submit_enabled else tk.DISABLED)
            if show_submit:
                self.btn_submit.pack(side=tk.TOP, anchor=tk.E, pady=4)
            else:
                self.btn_submit.pack_forget()
        elif view.mode == "flashcard":
            self.flash_frame.pack(side=tk.TOP, fill=tk.X)
            self.lbl_answer.configure(text=view.answer_text if view.flashcard_revealed else "")
            self.btn_reveal.configure(state=tk.DISABLED if view.flashcard_revealed else tk.NORMAL)
        else:
            self.options_frame.pack(side=tk.TOP, fill=tk.X)
            self._draw_options(view)
        self._draw_feedback(view)

    def _draw_header(self, view: ScreenView) -> None:
        self.lbl_category.configure(text=view.category_label)
        self.lbl_difficulty.configure(text=view.difficulty.capitalize())
        self.lbl_day.configure(text=view.day_label)
        if view.stats is not None:
            s = view.stats
            self.lbl_stats.configure(
                text=f"Day Streak: {s.streak}    Questions Answered: {s.total_answered}    Accuracy: {s.accuracy}%"
            )
        if view.browse_mode:
            self.btn_browse.configure(text="Back to today")
            self.btn_prev.pack(side=tk.LEFT, padx=4)
            self.lbl_position.pack(side=tk.LEFT, padx=4)
            self.btn_next.pack(side=tk.LEFT, padx=4)
            pos, total = view.browse_position or (0, 0)
            self.lbl_position.configure(text=f"{pos} / {total}")
            self.btn_prev.configure(state=tk.DISABLED if pos <= 1 else tk.NORMAL)
            self.btn_next.configure(state=tk.DISABLED if pos >= total else tk.NORMAL)
        else:
            self.btn_browse.configure(text="Browse all")
            for w in (self.btn_prev, self.lbl_position, self.btn_next):
                w.pack_forget()
        if view.diagram is not None:
            self.btn_mode.pack_forget()
        else:
            self.btn_mode.pack(side=tk.RIGHT)
            self.btn_mode.configure(text="Quiz mode" if view.mode == "flashcard" else "Flashcard mode")

    def _draw_options(self, view: ScreenView) -> None:
        for child in self.options_frame.winfo_children():
            child.destroy()
        for opt in view.options:
            text = f"{opt.letter}. {opt.text}"
            if "correct" in opt.classes:
                text += "  ✓"
            elif "incorrect" in opt.classes:
                text += "  ✗"
            btn = ttk.Button(self.options_frame, text=text, command=lambda i=opt.index: self._select(i))
            btn.pack(side=tk.TOP, fill=tk.X, pady=2)
            if opt.disabled:
                btn.state(["disabled"])

    def _draw_feedback(self, view: ScreenView) -> None:
        fb = view.feedback
        if fb is None or not fb.visible:
            self.lbl_feedback.configure(text="")
            return
        parts = [p for p in (fb.header, fb.explanation) if p]
        if fb.docs_link:
            parts.append(f"Docs: {fb.docs_link}")
        self.lbl_feedback.configure(text="\n".join(parts))

    def draw_diagram(self, view: Optional[DiagramView]) -> None:
        self.canvas.delete("all")
        if view is None:
            return
        for e in view.entities:
            fill = entity_fill(e)
            x0, y0, x1, y1 = e.x, e.y, e.x + e.w, e.y + e.h
            outline = "#3366cc" if "selected" in e.classes or "drag-over" in e.classes else "#888888"
            if e.shape == "circle":
                self.canvas.create_oval(x0, y0, x1, y1, fill=fill, outline=outline, width=2)
            else:
                self.canvas.create_rectangle(x0, y0, x1, y1, fill=fill, outline=outline, width=1 if "backdrop" in e.classes else 2)
            if e.kind in ("lane", "column", "rack", "zone", "pool"):
                self.canvas.create_text(x0 + 6, y0 + 4, text=e.label, anchor=tk.NW, fill="#555555")
            else:
                cx, cy = e.center
                self.canvas.create_text(cx, cy, text=e.label, width=max(e.w, 40))


def run_app(cfg: Dict[str, Any]) -> int:
    from .cli import build_controller

    try:
        ctrl = build_controller(cfg)
    except BankError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    ctrl.start()
    if ctrl.state.error:
        messagebox.showerror("Daily Question", "No questions available.")
        return 1
    app = App(ctrl)
    app.refresh()
    app.mainloop()
    return 0


def main(argv: list[str] | None = None) -> int:
    import argparse

    p = argparse.ArgumentParser(prog="dailyquiz-gui")
    p.add_argument("--config", default=None)
    p.add_argument("--explain", action="store_true")
    args = p.parse_args(argv)
    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)
    return run_app(validate_config(load_config(args.config)))


if __name__ == "__main__":
    raise SystemExit(main())
