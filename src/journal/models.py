"""Journal Models

ジャーナルエントリ（journal.csvの1行）のデータモデル定義。

Related Classes: CsvCodec (codec.py), JournalRepository (repository.py)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
MOOD_MIN = 1
MOOD_MAX = 5


def parse_mood(raw: Optional[str]) -> Optional[int]:
    """気分値をパース。空・非数値・範囲外はNone（未記録扱い）"""
    if raw is None or not raw.strip():
        return None
    try:
        mood = int(raw.strip())
    except ValueError:
        return None
    return mood if MOOD_MIN <= mood <= MOOD_MAX else None


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    """`YYYY-MM-DD HH:MM` 形式をパース。失敗時はNone"""
    if not text:
        return None
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        return None


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


@dataclass(slots=True)
class JournalEntry:
    """永続化されたジャーナルエントリの表現

    timestampはテキストのまま保持する（パース不能な行も読み込み可能にするため）。
    """

    timestamp: str  # YYYY-MM-DD HH:MM（ローカル時刻、TZなし）
    intention: str
    mood: Optional[int] = None  # 1-5、未記録はNone
    gratitude: str = ""

    @property
    def recorded_at(self) -> Optional[datetime]:
        return parse_timestamp(self.timestamp)

    @classmethod
    def create(
        cls,
        intention: str,
        mood: Optional[int],
        gratitude: str,
        now: datetime,
    ) -> "JournalEntry":
        """新規エントリを作成（範囲外の気分値はNoneに落とす）"""
        if mood is not None and not MOOD_MIN <= mood <= MOOD_MAX:
            mood = None
        return cls(
            timestamp=format_timestamp(now),
            intention=intention,
            mood=mood,
            gratitude=gratitude,
        )

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "JournalEntry":
        """デコード済みフィールドから生成。5列目以降は無視する"""
        padded = list(fields[:4]) + [""] * (4 - min(len(fields), 4))
        return cls(
            timestamp=padded[0],
            intention=padded[1],
            mood=parse_mood(padded[2]),
            gratitude=padded[3],
        )
