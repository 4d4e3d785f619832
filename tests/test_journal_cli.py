"""GentleDay ジャーナルCLI の動作テスト"""

import io
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path

import pytest

from src.journal.cli import JournalCLI, format_entry_text, main
from src.journal.config import JournalConfig
from src.journal.models import JournalEntry, format_timestamp
from src.journal.repository import HEADER, JournalRepository
from src.journal.ticker import Ticker

NOW = datetime(2024, 6, 10, 8, 30)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def make_cli(repo: JournalRepository, answers: list, **config_overrides):
    """入力・出力・時計を差し替えたCLIを作成"""
    fake = FakeClock()
    replies = iter(answers)
    out = io.StringIO()
    err = io.StringIO()
    config = JournalConfig(grounding_seconds=2, **config_overrides)
    cli = JournalCLI(
        repo,
        config=config,
        reader=lambda: next(replies),
        ticker=Ticker(clock=fake.clock, sleep=fake.sleep),
        now=lambda: NOW,
        out=out,
        err=err,
    )
    return cli, out, err


@pytest.fixture
def repo(tmp_path):
    repo = JournalRepository(path=tmp_path / "journal.csv")
    repo.ensure_initialized()
    return repo


def test_format_entry_text():
    text = format_entry_text(JournalEntry("2024-06-10 08:30", "Stay calm", None, ""))
    assert text == "• 2024-06-10 08:30\n   intention: Stay calm\n   mood: —   gratitude: —"

    text = format_entry_text(JournalEntry("2024-06-10 08:30", "Stay calm", 4, "Tea"))
    assert text.endswith("   mood: 4   gratitude: Tea")


def test_new_entry_appends_one_row(repo):
    """新規エントリ: 入力 → タイマー → 1行追記"""
    cli, out, _ = make_cli(
        repo, ["1", " Be kind, today ", "4", 'tea "hot"', "n", ""]
    )

    assert cli.menu() == 0

    lines = repo.path.read_text(encoding="utf-8").splitlines()
    assert lines == [HEADER, '2024-06-10 08:30,"Be kind, today",4,"tea ""hot"""']
    text = out.getvalue()
    assert "⏳ 2s remaining..." in text
    assert "Micro-timer" not in text
    assert f"✅ Saved to {repo.path}" in text


def test_new_entry_with_micro_timer_and_invalid_mood(repo):
    cli, out, _ = make_cli(repo, ["1", "Rest", "9", "", "YES", ""], micro_breaths=1)

    cli.menu()

    assert "✓ Micro-timer complete." in out.getvalue()
    assert repo.load_all() == [JournalEntry("2024-06-10 08:30", "Rest", None, "")]


def test_new_entry_write_failure_is_reported(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    cli, out, err = make_cli(
        JournalRepository(path=blocker / "journal.csv"), ["Rest", "", "", "n", ""]
    )

    assert cli.new_entry() == 0

    assert "Error: Write failed" in err.getvalue()
    assert "Saved" not in out.getvalue()


def test_review_last_n(repo):
    for day in (7, 8, 9):
        repo.append(JournalEntry(f"2024-06-0{day} 08:00", f"day {day}", day - 5, ""))

    cli, out, _ = make_cli(repo, ["2", "2"])
    cli.menu()

    text = out.getvalue()
    assert "- Last 2 entries -" in text
    assert text.index("day 9") < text.index("day 8")
    assert "day 7" not in text


def test_review_invalid_count_shows_default(repo):
    for day in range(1, 8):
        repo.append(JournalEntry(f"2024-06-0{day} 08:00", f"day {day}", None, ""))

    cli, out, _ = make_cli(repo, ["abc"])
    cli.review()

    text = out.getvalue()
    assert "- Last 5 entries -" in text
    assert "day 2" not in text


def test_review_single_entry_and_empty(repo):
    cli, out, _ = make_cli(repo, ["3"])
    cli.review()
    assert "(No entries yet)" in out.getvalue()

    repo.append(JournalEntry("2024-06-10 08:00", "only", None, ""))
    cli, out, _ = make_cli(repo, ["10"])
    cli.review()
    assert "- Last 1 entry -" in out.getvalue()


def test_show_today(repo):
    repo.append(JournalEntry("2024-06-09 22:00", "yesterday", None, ""))
    repo.append(JournalEntry("2024-06-10 07:00", "morning", 3, ""))
    repo.append(JournalEntry("2024-06-10 08:00", "later", None, ""))

    cli, out, _ = make_cli(repo, [])
    cli.show_today()

    text = out.getvalue()
    assert "- Today (2024-06-10) -" in text
    assert text.index("later") < text.index("morning")
    assert "yesterday" not in text


def test_show_today_messages(repo):
    cli, out, _ = make_cli(repo, [])
    cli.show_today()
    assert "(No entries yet.)" in out.getvalue()

    repo.append(JournalEntry("2024-06-01 07:00", "old", None, ""))
    cli, out, _ = make_cli(repo, [])
    cli.show_today()
    assert "(No entries for today yet.)" in out.getvalue()


def test_show_weekly(repo):
    repo.append(JournalEntry("2024-06-08 07:00", "a", 2, ""))
    repo.append(JournalEntry("2024-06-09 07:00", "b", 4, ""))
    repo.append(JournalEntry("2024-06-10 07:00", "c", 5, ""))

    cli, out, _ = make_cli(repo, ["4"])
    cli.menu()

    text = out.getvalue()
    assert "- Weekly Summary (2024-06-04 to 2024-06-10) -" in text
    assert "Entries: 3" in text
    assert "Average mood: 3.67 (from 3 moods)" in text
    assert "Current daily streak (ending today): 3 day(s)" in text


def test_show_weekly_without_moods(repo):
    repo.append(JournalEntry("2024-06-08 07:00", "a", None, ""))

    cli, out, _ = make_cli(repo, [])
    cli.show_weekly()

    text = out.getvalue()
    assert "Entries: 1" in text
    assert "Average mood: - (no moods logged)" in text
    assert "Current daily streak (ending today): -" in text


def test_read_failure_is_reported_and_treated_as_empty(tmp_path):
    cli, out, err = make_cli(JournalRepository(path=tmp_path / "missing.csv"), [])

    assert cli.show_weekly() == 0

    assert "Error: Read failed" in err.getvalue()
    assert "(No entries yet.)" in out.getvalue()


@pytest.mark.parametrize(
    "choice, expected",
    [("5", "Take good care today. ✨"), ("9", "Please choose 1-5."), ("", "Please choose 1-5.")],
)
def test_menu_exit_and_invalid_choice(repo, choice, expected):
    cli, out, _ = make_cli(repo, [choice])
    assert cli.menu() == 0
    assert expected in out.getvalue()
    assert " 5) Exit" in out.getvalue()


def test_main_flags(tmp_path, capsys):
    journal = tmp_path / "journal.csv"

    assert main(["--journal-file", str(journal), "--help"]) == 0
    assert "Usage:" in capsys.readouterr().out
    # フラグに関係なくヘッダーは作成される
    assert journal.read_text(encoding="utf-8") == HEADER + "\n"

    assert main(["--journal-file", str(journal), "--bogus"]) == 0
    assert "Unknown option. Try --help" in capsys.readouterr().out

    assert main(["--journal-file", str(journal), "--weekly"]) == 0
    assert "(No entries yet.)" in capsys.readouterr().out


def test_main_today(tmp_path, capsys):
    journal = tmp_path / "journal.csv"
    repo = JournalRepository(path=journal)
    repo.ensure_initialized()
    repo.append(JournalEntry(format_timestamp(datetime.now()), "right now", 3, ""))

    assert main(["--journal-file", str(journal), "--today"]) == 0

    out = capsys.readouterr().out
    assert "- Today (" in out
    assert "intention: right now" in out


def run_cli(args: list, journal: Path) -> subprocess.CompletedProcess:
    """CLI実行ヘルパー"""
    cmd = [sys.executable, "-m", "src.journal", "--journal-file", str(journal)] + args
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=Path(__file__).parent.parent,
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )


def test_cli_subprocess_flags(tmp_path):
    journal = tmp_path / "journal.csv"

    result = run_cli(["--help"], journal)
    assert result.returncode == 0
    assert "Usage: python -m src.journal [--today|--weekly|--help]" in result.stdout

    result = run_cli(["oops"], journal)
    assert result.returncode == 0
    assert "Unknown option" in result.stdout


def test_cli_subprocess_menu_exit(tmp_path):
    journal = tmp_path / "journal.csv"
    cmd = [sys.executable, "-m", "src.journal", "--journal-file", str(journal)]
    result = subprocess.run(
        cmd,
        input="5\n",
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=Path(__file__).parent.parent,
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )
    assert result.returncode == 0
    assert "Take good care today." in result.stdout


def test_main_non_utf8_journal_is_reported_as_empty(tmp_path, capsys):
    journal = tmp_path / "journal.csv"
    journal.write_bytes((HEADER + "\n2024-06-10 08:30,caf\xe9,3,\n").encode("latin-1"))

    assert main(["--journal-file", str(journal), "--weekly"]) == 0

    captured = capsys.readouterr()
    assert "Error: Read failed" in captured.err
    assert "(No entries yet.)" in captured.out


@pytest.mark.parametrize(
    "args",
    [["--today=yes"], ["--weekly=1"], ["--journal-file"]],
)
def test_main_malformed_arguments_exit_zero(tmp_path, capsys, args):
    """不正な引数でも終了コード0で Unknown option を表示"""
    journal = tmp_path / "journal.csv"
    # 値のない --journal-file は末尾に置く
    argv = ["--journal-file", str(journal)] + args

    assert main(argv) == 0
    assert "Unknown option. Try --help" in capsys.readouterr().out


def test_main_first_flag_decides(tmp_path, capsys):
    journal = tmp_path / "journal.csv"
    repo = JournalRepository(path=journal)
    repo.ensure_initialized()
    repo.append(JournalEntry(format_timestamp(datetime.now()), "right now", 3, ""))

    assert main(["--weekly", "--today", "--journal-file", str(journal)]) == 0
    out = capsys.readouterr().out
    assert "- Weekly Summary (" in out
    assert "- Today (" not in out

    assert main(["--today", "--weekly", "--journal-file", str(journal)]) == 0
    out = capsys.readouterr().out
    assert "- Today (" in out
    assert "Weekly Summary" not in out

    assert main(["--help", "--weekly", "--journal-file", str(journal)]) == 0
    out = capsys.readouterr().out
    assert "Usage:" in out
    assert "Weekly Summary" not in out


def test_review_zero_count_shows_one_entry(repo):
    for day in (7, 8, 9):
        repo.append(JournalEntry(f"2024-06-0{day} 08:00", f"day {day}", None, ""))

    cli, out, _ = make_cli(repo, ["0"])
    cli.review()

    text = out.getvalue()
    assert "- Last 1 entry -" in text
    assert "day 9" in text
    assert "day 8" not in text
