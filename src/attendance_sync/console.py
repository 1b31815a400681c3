"""Terminal rendering helpers for the attendance-sync CLI."""

from __future__ import annotations

import getpass
import os
import shutil
import textwrap
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .formatting import display_date
from .models import EventKind, LogEntry, Outcome, Success

__all__ = ["ConsolePalette", "SyncConsole"]


@dataclass
class ConsolePalette:
    """ANSI palette that honours NO_COLOR."""

    reset: str = "\033[0m"
    bold: str = "\033[1m"
    dim: str = "\033[2m"
    blue: str = "\033[34m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    red: str = "\033[31m"
    amber: str = "\033[38;2;217;119;6m"

    @property
    def disabled(self) -> bool:
        return bool(os.getenv("NO_COLOR"))

    def apply(self, text: str, *styles: str) -> str:
        if self.disabled or not styles:
            return text
        return f"{''.join(styles)}{text}{self.reset}"


class SyncConsole:
    """Prompts, panels and history tables for the dashboard."""

    def __init__(self) -> None:
        self.palette = ConsolePalette()
        self.width = max(60, min(shutil.get_terminal_size((80, 20)).columns, 100))

    def _rule(self, label: str = "", *, accent: str = "amber", char: str = "═") -> str:
        label_text = f" {label} " if label else ""
        pad_total = max(self.width - len(label_text), 0)
        left = pad_total // 2
        line = f"{char * left}{label_text}{char * (pad_total - left)}"
        return self.palette.apply(line, getattr(self.palette, accent, ""))

    def _wrap(self, text: str, *, indent: int = 0) -> str:
        return textwrap.fill(text, width=self.width, subsequent_indent=" " * indent)

    def headline(self, title: str, *, accent: str = "amber") -> None:
        print(self._rule(title, accent=accent))

    def panel(self, title: str, body: Iterable[str], *, accent: str = "amber") -> None:
        print(self._rule(title, accent=accent))
        for line in body:
            print("  " + self._wrap(line, indent=2))
        print(self._rule(accent=accent))

    def text_block(self, text: str, *, tone: Optional[str] = None) -> None:
        payload = self._wrap(text)
        if tone:
            payload = self.palette.apply(payload, getattr(self.palette, tone, ""))
        print(payload)

    def prompt(self, prompt_text: str, *, default: str = "") -> str:
        suffix = f" [{default}]" if default else ""
        label = self.palette.apply(f"{prompt_text.strip()}{suffix} ", self.palette.green, self.palette.bold)
        try:
            raw = input(label)
        except EOFError:
            return default
        return raw.strip() or default

    def secret(self, prompt_text: str) -> str:
        try:
            return getpass.getpass(f"{prompt_text.strip()} ").strip()
        except EOFError:
            return ""

    def confirm(self, prompt_text: str, *, default: bool = True) -> bool:
        yes_no = "Y/n" if default else "y/N"
        while True:
            raw = self.prompt(f"{prompt_text} [{yes_no}]").lower()
            if not raw:
                return default
            if raw in ("y", "yes"):
                return True
            if raw in ("n", "no"):
                return False
            print(self.palette.apply("Please respond with yes or no.", self.palette.yellow))

    def prompt_menu(self, title: str, options: Sequence[str]) -> Optional[int]:
        """Return the chosen index, or None for 0/EOF."""
        self.headline(title)
        for idx, label in enumerate(options, start=1):
            print(f" {idx}. {label}")
        print(self.palette.apply(" 0. Log out", self.palette.dim))
        while True:
            try:
                raw = input(self.palette.apply("→ Select an option: ", self.palette.green)).strip()
            except EOFError:
                return None
            if raw == "0":
                return None
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return int(raw) - 1
            print(self.palette.apply("Invalid choice, try again.", self.palette.yellow))

    def candidates(self, check_in: str, check_out: str) -> None:
        self.panel("Candidate times", [f"In  {check_in}", f"Out {check_out}"])

    def outcome(self, outcome: Outcome) -> None:
        if isinstance(outcome, Success):
            line = f"✓ {outcome.kind.label} locked at {outcome.time} ({outcome.payload.occurred_at})"
            print(self.palette.apply(line, self.palette.green, self.palette.bold))
        else:
            print(self.palette.apply(f"✗ {outcome.message}", self.palette.red, self.palette.bold))

    def history(self, entries: Sequence[LogEntry]) -> None:
        if not entries:
            self.panel("History", ["No attempts yet"], accent="dim")
            return
        rows: List[str] = []
        for entry in entries:
            kind = "CHECK-IN " if entry.payload.kind is EventKind.CHECK_IN else "CHECK-OUT"
            stamp = entry.created_at.strftime("%H:%M")
            status = "ok" if entry.succeeded else f"failed: {entry.error}"
            rows.append(f"{kind}  {entry.payload.occurred_at}  {stamp}  {status}")
        self.panel("History", rows)

    def status(self, *, date: str, kind: EventKind, time: str, time_valid: bool) -> None:
        time_text = time if time_valid else f"{time} (invalid, use HH:MM:SS)"
        self.panel(
            "Submission",
            [
                f"Date  {display_date(date)}",
                f"Kind  {kind.label}",
                f"Time  {time_text}",
            ],
            accent="blue",
        )
