#!/usr/bin/env python3
"""
main.py – JDK Pulse
===================
Entry point: JSON command line (list / get / set), a Rich table for
headless use, and the Textual JDK picker.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from textual.app import App
from textual.binding import Binding

from errors import JdkPulseError
from jdk_manager import APP_NAME, JdkManager, load_config

logger = logging.getLogger("jdk_pulse")


# ──────────────────────────────────────────────
#  Logging
# ──────────────────────────────────────────────

def configure_logging(config: Dict[str, Any], verbose: bool = False) -> None:
    log_cfg = config.get("logging", {})
    level = logging.DEBUG if verbose else getattr(
        logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO
    )

    log_dir = Path(log_cfg.get("dir", "logs")).expanduser()
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "jdk_pulse.log", encoding="utf-8"))
    except OSError as exc:
        print(f"Warning: file logging disabled: {exc}", file=sys.stderr)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


# ──────────────────────────────────────────────
#  CLI
# ──────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jdk-pulse",
        description="☕  JDK Pulse – discover JDKs and pick the active one",
    )
    p.add_argument("--config", default="config.json", help="Path to config.json")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")

    action = p.add_mutually_exclusive_group()
    action.add_argument("-l", "--list", action="store_true", help="List all installed JDKs (default)")
    action.add_argument("-g", "--get", action="store_true", help="Get current active JDK")
    action.add_argument("-s", "--set", metavar="ID_OR_HOME", help="Set active JDK by ID or home path")
    action.add_argument("--headless", action="store_true", help="Print a table instead of JSON")
    action.add_argument("--tui", action="store_true", help="Open the interactive JDK picker")
    return p


def _cmd_list(mgr: JdkManager) -> int:
    try:
        jdks = mgr.list()
    except JdkPulseError as exc:
        print(f"Error listing JDKs: {exc}", file=sys.stderr)
        return 1
    print(json.dumps([j.to_dict() for j in jdks], indent=2))
    return 0


def _cmd_get(mgr: JdkManager) -> int:
    try:
        active = mgr.get_active()
    except JdkPulseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(active.to_dict() if active else {}, indent=2))
    return 0


def _cmd_set(mgr: JdkManager, target: str) -> int:
    try:
        home = mgr.set_active(target)
    except JdkPulseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Active JDK set to: {home}")
    return 0


def run_headless(mgr: JdkManager) -> int:
    from rich.console import Console
    from rich.table import Table

    console = Console()
    try:
        jdks = mgr.list()
        active = mgr.get_active()
    except JdkPulseError as exc:
        console.print(f"[bold red]Error loading JDKs:[/] {exc}")
        return 1

    t = Table(title=f"☕ {APP_NAME}")
    t.add_column("", width=1)
    t.add_column("JDK", style="cyan")
    t.add_column("ID", style="white")
    t.add_column("Home", style="dim")
    for jdk in jdks:
        mark = "[green]✓[/]" if mgr.is_active(jdk, active) else ""
        t.add_row(mark, mgr.label_for(jdk), jdk.id, jdk.home)
    console.print(t)
    console.print(f"\n[bold]{mgr.status_text(active)}[/]")
    return 0


# ──────────────────────────────────────────────
#  Textual App
# ──────────────────────────────────────────────

class JdkPulseApp(App):
    """Interactive JDK picker."""

    TITLE = f"☕ {APP_NAME}"
    SUB_TITLE = "No JDK selected"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, manager: JdkManager, **kw: Any) -> None:
        super().__init__(**kw)
        self.manager = manager

    def on_mount(self) -> None:
        from ui.jdk_panel import JdkScreen

        logger.info("Picker started – state file: %s", self.manager.store.state_file)
        self.push_screen(JdkScreen(self.manager))


# ──────────────────────────────────────────────
#  Entry Point
# ──────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    configure_logging(config, args.verbose)

    mgr = JdkManager(args.config, config=config)

    if args.set is not None:
        return _cmd_set(mgr, args.set)
    if args.get:
        return _cmd_get(mgr)
    if args.headless:
        return run_headless(mgr)
    if args.tui:
        JdkPulseApp(mgr).run()
        return 0
    return _cmd_list(mgr)


if __name__ == "__main__":
    sys.exit(main())
