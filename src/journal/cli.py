#!/usr/bin/env python3
"""
GentleDay ジャーナルCLI - 意図・気分・感謝を1日1行ずつ記録する

Usage:
    python -m src.journal                 # 対話メニュー（1-5）
    python -m src.journal --today         # 今日のエントリを表示
    python -m src.journal --weekly        # 直近7日間のサマリーを表示
    python -m src.journal --help          # 使い方を表示

Options:
    --journal-file PATH   journal.csv のパス（デフォルト: カレントディレクトリの journal.csv）
    --config PATH         YAML設定ファイル（デフォルト: config/journal.yaml があれば使用）
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO

import yaml

from .aggregator import last_n, parse_count, today_entries, weekly_summary
from .config import JournalConfig, load_config
from .exceptions import JournalStoreError
from .logger import setup_logger
from .models import JournalEntry, parse_mood
from .repository import JournalRepository
from .ticker import Ticker, countdown, micro_breaths

USAGE = "Usage: python -m src.journal [--today|--weekly|--help]"
EMPTY_MARK = "—"
UNKNOWN_OPTION = "Unknown option. Try --help"

logger = logging.getLogger(__name__)


def read_stdin_line() -> str:
    """標準入力から1行読む（EOFは空行扱い）"""
    line = sys.stdin.readline()
    return line.rstrip("\r\n")


def format_entry_text(entry: JournalEntry) -> str:
    """エントリを3行のテキストに整形"""
    mood = EMPTY_MARK if entry.mood is None else str(entry.mood)
    gratitude = entry.gratitude if entry.gratitude.strip() else EMPTY_MARK
    return "\n".join(
        [
            f"• {entry.timestamp}",
            f"   intention: {entry.intention}",
            f"   mood: {mood}   gratitude: {gratitude}",
        ]
    )


class JournalCLI:
    """メニュー・各ビューの実行。入出力と時計は差し替え可能"""

    def __init__(
        self,
        repo: JournalRepository,
        config: Optional[JournalConfig] = None,
        reader: Optional[Callable[[], str]] = None,
        ticker: Optional[Ticker] = None,
        now: Optional[Callable[[], datetime]] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        self.repo = repo
        self.config = config or JournalConfig()
        self.reader = reader or read_stdin_line
        self.ticker = ticker or Ticker()
        self.now = now or datetime.now
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _print(self, text: str = "", end: str = "\n") -> None:
        self.out.write(text + end)
        self.out.flush()

    def _ask(self, prompt: str) -> str:
        self._print(prompt, end="")
        return self.reader().strip()

    def _report(self, exc: Exception) -> None:
        logger.error(str(exc))
        print(f"Error: {exc}", file=self.err)

    def ensure_journal(self) -> None:
        try:
            self.repo.ensure_initialized()
        except JournalStoreError as exc:
            self._report(exc)

    def _load_entries(self) -> List[JournalEntry]:
        try:
            return self.repo.load_all()
        except JournalStoreError as exc:
            self._report(exc)
            return []

    def _print_entries(self, entries: Sequence[JournalEntry]) -> None:
        for entry in entries:
            self._print(format_entry_text(entry))

    def new_entry(self) -> int:
        """意図・気分・感謝を入力し、タイマー後に1行追記"""
        self._print("\n🕯️ New entry")
        intention = self._ask("Intention for today (one line): ")
        mood = parse_mood(self._ask("Optional: mood 1-5 (press Enter to skip): "))
        gratitude = self._ask("One thing you're grateful for (optional, Enter to skip): ")

        seconds = self.config.grounding_seconds
        breaths = self.config.micro_breaths
        micro = self._ask(
            f"Do a {breaths}-breath micro-timer before the {seconds}s timer? (Y/N): "
        ).lower()
        if micro in ("y", "yes"):
            micro_breaths(breaths, self.ticker, self.out, self.config.breath_phases)

        self._print(f"\n💨 {seconds}-second grounding timer (press Enter to start). . . ")
        self.reader()
        countdown(seconds, self.ticker, self.out)

        entry = JournalEntry.create(intention, mood, gratitude, self.now())
        try:
            self.repo.append(entry)
        except JournalStoreError as exc:
            self._report(exc)
            return 0
        self._print(f"\n✅ Saved to {self.repo.path}")
        return 0

    def review(self) -> int:
        """直近N件を新しい順に表示"""
        default = self.config.review_default_count
        n = parse_count(self._ask("\nHow many recent entries to show? "), default)

        entries = self._load_entries()
        if not entries:
            self._print("\n(No entries yet)")
            return 0

        shown = last_n(entries, n, default)
        suffix = "y" if len(shown) == 1 else "ies"
        self._print(f"\n- Last {len(shown)} entr{suffix} -")
        self._print_entries(shown)
        return 0

    def show_today(self) -> int:
        entries = self._load_entries()
        if not entries:
            self._print("\n(No entries yet.)")
            return 0

        today = self.now().date()
        todays = today_entries(entries, today)
        if not todays:
            self._print("\n(No entries for today yet.)")
            return 0

        self._print(f"\n- Today ({today.isoformat()}) -")
        self._print_entries(todays)
        return 0

    def show_weekly(self) -> int:
        entries = self._load_entries()
        if not entries:
            self._print("\n(No entries yet.)")
            return 0

        summary = weekly_summary(entries, self.now().date())
        self._print(
            f"\n- Weekly Summary ({summary.start.isoformat()} to {summary.end.isoformat()}) -"
        )
        self._print(f"Entries: {summary.count}")
        if summary.average_mood is not None:
            self._print(
                f"Average mood: {summary.average_mood_text} (from {summary.mood_count} moods)"
            )
        else:
            self._print(f"Average mood: - ({summary.average_mood_text})")
        self._print(f"Current daily streak (ending today): {summary.streak_text}")
        return 0

    def menu(self) -> int:
        """対話メニュー（1回の選択で終了）"""
        self._print("\nChoose an option")
        self._print(" 1) New entry (intention + grounding timer)")
        self._print(" 2) Review last N entries")
        self._print(" 3) Today's entries")
        self._print(" 4) Weekly summary")
        self._print(" 5) Exit")
        choice = self._ask("> ")

        if choice == "1":
            return self.new_entry()
        elif choice == "2":
            return self.review()
        elif choice == "3":
            return self.show_today()
        elif choice == "4":
            return self.show_weekly()
        elif choice == "5":
            self._print("\nTake good care today. ✨")
            return 0
        else:
            self._print("Please choose 1-5.")
            return 0


def build_parser() -> argparse.ArgumentParser:
    # 動作フラグ（--today/--weekly/--help）は先頭の残り引数で判定するため、ここではファイル指定のみ
    parser = argparse.ArgumentParser(
        prog="python -m src.journal",
        description="GentleDay ジャーナル - 意図・気分・感謝の記録",
        add_help=False,
        allow_abbrev=False,
        exit_on_error=False,
    )
    parser.add_argument("--journal-file", type=str, help="journal.csv のパス")
    parser.add_argument("--config", type=str, help="YAML設定ファイルのパス")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLIエントリポイント（終了コードは常に0）"""
    try:
        args, rest = build_parser().parse_known_args(argv)
    except argparse.ArgumentError as exc:
        logger.debug(f"Argument error: {exc}")
        print(UNKNOWN_OPTION)
        return 0

    try:
        config = load_config(Path(args.config) if args.config else None)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        print(f"Error: 設定の読み込みに失敗しました: {exc}", file=sys.stderr)
        config = JournalConfig()

    setup_logger(config.log_level, config.log_file)

    repo = JournalRepository(path=Path(args.journal_file or config.journal_file))
    cli = JournalCLI(repo, config=config)
    cli.ensure_journal()

    # 最初のフラグだけが動作を決める
    action = rest[0] if rest else None
    if action is None:
        return cli.menu()
    if action == "--help":
        print(USAGE)
        return 0
    if action == "--today":
        return cli.show_today()
    if action == "--weekly":
        return cli.show_weekly()
    print(UNKNOWN_OPTION)
    return 0


if __name__ == "__main__":
    sys.exit(main())
