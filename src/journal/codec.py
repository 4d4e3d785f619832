"""journal.csv の1行エンコード／デコード

標準csvモジュールではなく、元のjournal.csvと互換な寛容な方言で実装している。
- 書き込み: カンマ・ダブルクォート・改行を含むフィールドのみクォート
- 読み込み: 1パスの文字スキャナ（クォート内フラグ1つ）

既知の制限: 改行を含むフィールドはクォートして書き込むが、
読み込みは行単位のため複数行のレコードとしては復元されない。
"""

from __future__ import annotations

from typing import List, Optional

from .models import JournalEntry

FIELD_COUNT = 4
QUOTE = '"'
SEPARATOR = ","


class CsvCodec:
    """JournalEntry <-> CSV行 の変換"""

    @staticmethod
    def escape(value: Optional[str]) -> str:
        if value is None:
            return ""
        needs_quotes = SEPARATOR in value or QUOTE in value or "\n" in value
        body = value.replace(QUOTE, QUOTE * 2)
        return f"{QUOTE}{body}{QUOTE}" if needs_quotes else body

    def encode(self, entry: JournalEntry) -> str:
        """エントリを1行に変換（改行は含まない）"""
        mood = "" if entry.mood is None else str(entry.mood)
        return SEPARATOR.join(
            [
                self.escape(entry.timestamp),
                self.escape(entry.intention),
                mood,
                self.escape(entry.gratitude),
            ]
        )

    def decode(self, line: str) -> List[str]:
        """1行をフィールドに分解

        4列未満は空文字で補完する。5列以上はそのまま返す
        （JournalEntry.from_fields が先頭4列のみ使用）。
        """
        fields: List[str] = []
        current: List[str] = []
        in_quotes = False
        i = 0
        length = len(line)

        while i < length:
            char = line[i]
            if in_quotes:
                if char == QUOTE:
                    if i + 1 < length and line[i + 1] == QUOTE:
                        current.append(QUOTE)
                        i += 1
                    else:
                        in_quotes = False
                else:
                    current.append(char)
            elif char == QUOTE:
                in_quotes = True
            elif char == SEPARATOR:
                fields.append("".join(current))
                current = []
            else:
                current.append(char)
            i += 1

        fields.append("".join(current))
        while len(fields) < FIELD_COUNT:
            fields.append("")
        return fields

    def decode_entry(self, line: str) -> JournalEntry:
        return JournalEntry.from_fields(self.decode(line))
