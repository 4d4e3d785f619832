"""
グラウンディングタイマー／呼吸タイマー

時計とsleepを Ticker に切り出し、テストでは偽の時計で実時間を待たずに実行する。
タイマーは単一スレッドをブロックする。中断（Ctrl+C等）は特に処理しない。
"""

from __future__ import annotations

import math
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, TextIO, Tuple

POLL_INTERVAL = 0.1

DEFAULT_BREATH_PHASES: Tuple[Tuple[str, int], ...] = (
    ("Inhale", 4),
    ("Hold  ", 2),
    ("Exhale", 6),
)


@dataclass
class Ticker:
    """進捗表示用の時計とsleepの組"""

    clock: Callable[[], float] = field(default=time.monotonic)
    sleep: Callable[[float], None] = field(default=time.sleep)

    def now(self) -> float:
        return self.clock()

    def wait(self, seconds: float) -> None:
        self.sleep(seconds)


def _write(out: TextIO, text: str) -> None:
    out.write(text)
    out.flush()


def countdown(seconds: int, ticker: Optional[Ticker] = None, out: Optional[TextIO] = None) -> None:
    """残り秒数が変わるたびに `⏳ Ns remaining...` を同じ行に再描画する"""
    ticker = ticker or Ticker()
    out = out or sys.stdout

    end = ticker.now() + seconds
    last = seconds + 1  # 初回は必ず描画
    while True:
        left = math.ceil(max(0.0, end - ticker.now()))
        if left != last:
            last = left
            _write(out, f"\r⏳ {left}s remaining...")
        if left == 0:
            break
        ticker.wait(POLL_INTERVAL)
    _write(out, "\rDone." + " " * 46 + "\n")


def breath_phase(
    label: str, seconds: int, ticker: Optional[Ticker] = None, out: Optional[TextIO] = None
) -> None:
    ticker = ticker or Ticker()
    out = out or sys.stdout
    for remaining in range(seconds, 0, -1):
        _write(out, f"\r{label} {remaining}… ")
        ticker.wait(1)
    _write(out, f"\r{label} done.     \n")


def micro_breaths(
    breaths: int,
    ticker: Optional[Ticker] = None,
    out: Optional[TextIO] = None,
    phases: Sequence[Tuple[str, int]] = DEFAULT_BREATH_PHASES,
) -> None:
    """吸う・止める・吐くを breaths 回繰り返す"""
    ticker = ticker or Ticker()
    out = out or sys.stdout
    _write(out, f"\n🌬  Micro-timer: {breaths} breaths\n")
    for _ in range(breaths):
        for label, seconds in phases:
            breath_phase(label, seconds, ticker, out)
    _write(out, "✓ Micro-timer complete.\n")
