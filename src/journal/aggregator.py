"""
ジャーナル集計

読み込み済みのエントリ列から「直近N件」「今日の分」「週次サマリー」を導出する。
時計は読まず、基準日 today は呼び出し側から受け取る。

関連:
- src/journal/repository.py: JournalRepository.load_all（入力データ）
- src/journal/cli.py: 集計結果の表示
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from .models import MOOD_MAX, MOOD_MIN, JournalEntry

DEFAULT_REVIEW_COUNT = 5
WINDOW_DAYS = 7
NO_MOODS_TEXT = "no moods logged"
NO_STREAK_TEXT = "-"


class WeeklySummary(BaseModel):
    """週次サマリーモデル"""

    start: date = Field(..., description="集計期間の開始日（today - 6日）")
    end: date = Field(..., description="集計期間の終了日（today）")
    count: int = Field(0, description="期間内のエントリ数")
    mood_count: int = Field(0, description="有効な気分値の件数")
    average_mood: Optional[float] = Field(None, description="気分値の平均（記録なしはNone）")
    streak: int = Field(0, description="todayから遡った連続記録日数")

    @property
    def average_mood_text(self) -> str:
        if self.average_mood is None:
            return NO_MOODS_TEXT
        return f"{self.average_mood:.2f}"

    @property
    def streak_text(self) -> str:
        return f"{self.streak} day(s)" if self.streak > 0 else NO_STREAK_TEXT


def parse_count(raw: Optional[str], default: int = DEFAULT_REVIEW_COUNT) -> int:
    """表示件数の入力をパース。非数値はdefault、0以下は1に丸める"""
    try:
        n = int((raw or "").strip())
    except ValueError:
        return default
    return max(1, n)


def last_n(
    entries: Sequence[JournalEntry], n: int, default: int = DEFAULT_REVIEW_COUNT
) -> List[JournalEntry]:
    """直近n件を新しい順で返す（nが件数より多ければ全件）"""
    if not isinstance(n, int):
        n = default
    n = max(1, n)
    return list(reversed(entries[-n:])) if entries else []


def today_entries(entries: Sequence[JournalEntry], today: date) -> List[JournalEntry]:
    """今日のエントリを新しい順で返す。timestampをパースできない行は除外"""
    todays = []
    for entry in entries:
        recorded_at = entry.recorded_at
        if recorded_at is not None and recorded_at.date() == today:
            todays.append(entry)
    todays.reverse()
    return todays


def weekly_summary(entries: Sequence[JournalEntry], today: date) -> WeeklySummary:
    """[today - 6日, today] の7日間を集計"""
    start = today - timedelta(days=WINDOW_DAYS - 1)
    count = 0
    mood_sum = 0
    mood_count = 0
    days_with_entries = set()

    for entry in entries:
        recorded_at = entry.recorded_at
        if recorded_at is None:
            continue
        day = recorded_at.date()
        if start <= day <= today:
            count += 1
            days_with_entries.add(day)
            if entry.mood is not None and MOOD_MIN <= entry.mood <= MOOD_MAX:
                mood_sum += entry.mood
                mood_count += 1

    streak = 0
    day = today
    while day in days_with_entries:
        streak += 1
        day -= timedelta(days=1)

    return WeeklySummary(
        start=start,
        end=today,
        count=count,
        mood_count=mood_count,
        average_mood=mood_sum / mood_count if mood_count else None,
        streak=streak,
    )
