from __future__ import annotations

"""Console front end for dailyquiz built on the SessionController."""

import argparse
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from ..bank.loader import BankError, load_bank
from ..config.config import load_config, validate_config
from ..diagrams.base_diagram import Canvas
from ..interaction.gestures import POOL
from ..progress.store import JsonFileBackend, ProgressStore
from ..stats.stats import format_summary
from ..util.clock import Clock
from .diagram_registry import list_diagrams
from .screen import ScreenView
from .session_controller import SessionController

Ask = Callable[[str], str]

HELP = (
    "Commands: A-D answer | f flip card | m toggle quiz/flashcard | <id> click entity | "
    "<item>=<zone> drag | <item>=pool return item | s submit | browse | next | prev | "
    "jump <N> | today | q quit"
)


def build_controller(cfg: dict[str, Any], *, clock: Optional[Clock] = None) -> SessionController:
    """Wire bank, progress store and answer history from a validated config."""
    bank = load_bank(cfg["bank"].get("path"))
    store = ProgressStore(JsonFileBackend(cfg["storage"]["data_dir"]), key=cfg["storage"]["key"])
    history = None
    if cfg["history"].get("enabled"):
        from storage.store import AnswerHistory

        history = AnswerHistory(Path(cfg["history"]["data_dir"]))
    canvas = Canvas(width=cfg["canvas"]["width"], height=cfg["canvas"]["height"])
    return SessionController(
        bank,
        store,
        clock=clock,
        history=history,
        canvas=canvas,
        start_mode=cfg["ui"]["start_mode"],
    )


# --- rendering ---

def render_text(view: ScreenView) -> str:
    if view.error == "empty_bank":
        return "No questions available."
    if view.question_id is None:
        return ""
    lines = []
    header = f"[{view.category_label}] [{view.difficulty}]  {view.day_label}"
    if view.browse_position:
        header += f"  (browsing {view.browse_position[0]}/{view.browse_position[1]})"
    lines.append(header)
    lines.append("")
    lines.append(f"Q{view.question_id}. {view.question_text}")

    if view.diagram is not None:
        d = view.diagram
        lines.append(f"  ({d.kind}) {d.hint}")
        for e in d.entities:
            if e.kind == "pool" or "backdrop" in e.classes:
                continue
            tag = ",".join(c for c in e.classes if c not in ("selectable", "draggable", "drop-zone"))
            lines.append(f"    {e.kind:<8} {e.id:<12} {e.label}" + (f"  <{tag}>" if tag else ""))
        if d.interaction != "click" or d.multi_select:
            lines.append(f"  Submit: {'ready' if view.submit_enabled else 'not ready'}")
    elif view.mode == "flashcard":
        if view.flashcard_revealed:
            lines.append(f"  Answer: {view.answer_text}")
        else:
            lines.append("  (press f to reveal the answer)")
    else:
        for opt in view.options:
            mark = ""
            if "correct" in opt.classes:
                mark = "  [correct]"
            elif "incorrect" in opt.classes:
                mark = "  [your answer]"
            lines.append(f"  {opt.letter}) {opt.text}{mark}")

    fb = view.feedback
    if fb is not None and fb.visible:
        lines.append("")
        if fb.header:
            lines.append(fb.header)
        lines.append(fb.explanation)
        if fb.docs_link:
            lines.append(f"Docs: {fb.docs_link}")

    if view.stats is not None:
        s = view.stats
        lines.append("")
        lines.append(f"Streak {s.streak} | Answered {s.total_answered} | Accuracy {s.accuracy}%")
    return "\n".join(lines)


# --- input ---

def drag_to(target: Any, item_id: str, zone_id: str) -> bool:
    """Drive a full pointer gesture from an item's center to a zone (or the pool)."""
    view = target.diagram_view()
    if view is None:
        return False
    item = view.find(item_id, kind="item")
    dest = view.find(POOL, kind="pool") if zone_id == "pool" else view.find(zone_id, kind="zone")
    if item is None or dest is None:
        return False
    target.pointer_down(*item.center)
    target.pointer_move(*dest.center)
    target.pointer_up(*dest.center)
    return True


def handle_command(target: Any, cmd: str) -> bool:
    """Apply one console command to a controller or practice session.

    Returns False for the quit command.
    """
    cmd = cmd.strip()
    if not cmd:
        return True
    low = cmd.lower()
    if low in ("q", "quit", "exit"):
        return False
    if low in ("h", "?", "help"):
        print(HELP)
        return True

    is_controller = isinstance(target, SessionController)
    if is_controller:
        if low == "next":
            target.browse_next()
            return True
        if low == "prev":
            target.browse_prev()
            return True
        if low.startswith("jump "):
            try:
                target.browse_jump(int(low[5:]) - 1)
            except ValueError:
                print(f"[WARN] Not a position: {cmd[5:]}")
            return True
        if low == "browse":
            target.enter_browse()
            return True
        if low == "today":
            target.exit_browse()
            return True

    question = target.state.question
    if question is None:
        return True
    if low == "m" and not question.is_diagram:
        target.set_mode("flashcard" if target.state.mode == "quiz" else "quiz")
    elif low == "f":
        target.reveal_flashcard()
    elif low == "s":
        target.submit()
    elif "=" in cmd and question.is_diagram:
        item_id, zone_id = (p.strip() for p in cmd.split("=", 1))
        if not drag_to(target, item_id, zone_id):
            print(f"[WARN] Cannot drag '{item_id}' to '{zone_id}'")
    elif question.is_diagram:
        target.click_entity(cmd)
    elif len(low) == 1 and "a" <= low <= "z":
        target.select_option(ord(low) - ord("a"))
    else:
        print(f"[WARN] Unknown command: {cmd}")
    return True


def interact(target: Any, ask: Ask = input) -> None:
    print(render_text(target.render()))
    while True:
        try:
            cmd = ask("> ")
        except EOFError:
            break
        if not handle_command(target, cmd):
            break
        print()
        print(render_text(target.render()))


# --- entry point ---

def _load(args: argparse.Namespace) -> dict[str, Any]:
    if getattr(args, "explain", False):
        from .explain import enable as explain_enable
        explain_enable(True)
    cfg = validate_config(load_config(args.config))
    if cfg["ui"].get("explain"):
        from .explain import enable as explain_enable
        explain_enable(True)
    return cfg


def _controller_or_exit(cfg: dict[str, Any]) -> SessionController:
    try:
        return build_controller(cfg)
    except BankError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="dailyquiz")
    p.add_argument("--config", default=None)
    p.add_argument("--explain", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("today", help="Answer today's question")
    bp = sub.add_parser("browse", help="Browse the whole bank")
    bp.add_argument("--index", type=int, default=None, help="1-based start position")
    pp = sub.add_parser("practice", help="Answer any question without recording it")
    pp.add_argument("--question", type=int, required=True)
    sub.add_parser("stats")
    sub.add_parser("list", help="List questions and diagram kinds")
    hp = sub.add_parser("history", help="Show the recorded answer history")
    hp.add_argument("--question", type=int, default=None)
    hp.add_argument("--difficulty", default=None)
    hp.add_argument("--diagram-kind", dest="diagram_kind", default=None)
    hp.add_argument("--export", default=None, help="Write NDJSON to this path")
    rp = sub.add_parser("report", help="Build accuracy plots from the history")
    rp.add_argument("--outdir", default=None)
    sub.add_parser("gui")

    args = p.parse_args(argv)
    cfg = _load(args)

    if args.cmd == "gui":
        from .gui import run_app
        return run_app(cfg)

    if args.cmd in ("today", "browse"):
        ctrl = _controller_or_exit(cfg)
        ctrl.start()
        if ctrl.state.error:
            return 1
        if args.cmd == "browse":
            ctrl.enter_browse(None if args.index is None else args.index - 1)
        print(HELP)
        interact(ctrl)
        return 0

    if args.cmd == "practice":
        ctrl = _controller_or_exit(cfg)
        try:
            session = ctrl.practice(args.question)
        except KeyError as exc:
            print(f"ERROR: {exc.args[0]}", file=sys.stderr)
            return 1
        print("Practice mode: answers are not recorded.")
        print(HELP)
        interact(session)
        return 0

    if args.cmd == "stats":
        store = ProgressStore(JsonFileBackend(cfg["storage"]["data_dir"]), key=cfg["storage"]["key"])
        print(format_summary(store.get()))
        return 0

    if args.cmd == "list":
        ctrl = _controller_or_exit(cfg)
        ctrl.start()
        for row in ctrl.question_list():
            mark = "x" if row["answered"] else " "
            print(f"[{mark}] {row['id']:>4} {row['difficulty']:<6} {row['type']:<7} {row['question']}")
        print("\nDiagram kinds:")
        for m in list_diagrams():
            print(f"{m.id}: {m.name} - {m.description}")
        return 0

    if args.cmd == "history":
        from storage.store import export_ndjson, load_all, query_question, query_slice

        df = load_all(Path(cfg["history"]["data_dir"]))
        if args.question is not None:
            df = query_question(df, args.question)
        if args.difficulty or args.diagram_kind:
            df = query_slice(df, difficulty=args.difficulty, diagram_kind=args.diagram_kind)
        if df.empty:
            print("No recorded answers.")
            return 0
        if args.export:
            export_ndjson(df, Path(args.export))
            print(f"Wrote {len(df)} rows to {args.export}")
        else:
            print(df.to_string(index=False))
        return 0

    if args.cmd == "report":
        from analytics import AnalyticsConfig, build_reports

        outdir = Path(args.outdir or cfg["analytics"]["reports_dir"]).expanduser()
        if not outdir.is_absolute() and args.outdir is None:
            outdir = Path(cfg["storage"]["data_dir"]) / outdir
        written = build_reports(
            Path(cfg["history"]["data_dir"]),
            outdir,
            AnalyticsConfig(smoothing_span=cfg["analytics"]["smoothing_span"]),
        )
        if not written:
            print("No recorded answers yet; nothing to plot.")
        for path in written:
            print(f"Wrote {path}")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
