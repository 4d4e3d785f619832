from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from .codec import CsvCodec
from .exceptions import FileCreateError, FileReadError, FileWriteError
from .models import JournalEntry

HEADER = "timestamp, intention, mood, gratitude"
DEFAULT_FILE_NAME = "journal.csv"

logger = logging.getLogger(__name__)


class JournalRepository:
    """CSVベースの追記専用ジャーナル。

    読み込みのたびにファイル全体を再パースする（キャッシュなし）。
    書き込みは1回ごとに open/write/close する。ファイルロックは行わない。
    """

    def __init__(self, path: Optional[Path] = None, codec: Optional[CsvCodec] = None):
        env_path = os.getenv("GENTLE_DAY_JOURNAL_FILE")
        if path:
            self.path = Path(path)
        elif env_path:
            self.path = Path(env_path)
        else:
            self.path = Path(DEFAULT_FILE_NAME)
        self.codec = codec or CsvCodec()

    def ensure_initialized(self) -> bool:
        """ファイルが無ければヘッダー行のみで作成する。

        既存ファイルは上書きしない。

        Returns:
            新規作成した場合True

        Raises:
            FileCreateError: 作成・書き込みに失敗した場合
        """
        if self.path.exists():
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", newline="\n") as f:
                f.write(HEADER + "\n")
        except OSError as exc:
            raise FileCreateError(f"Could not create {self.path}: {exc}") from exc
        logger.info(f"Created journal file {self.path}")
        return True

    def append(self, entry: JournalEntry) -> None:
        """エントリを1行追記する（リトライなし）

        Raises:
            FileWriteError: 書き込みに失敗した場合
        """
        line = self.codec.encode(entry)
        try:
            with open(self.path, "a", encoding="utf-8", newline="\n") as f:
                f.write(line + "\n")
        except OSError as exc:
            raise FileWriteError(f"Write failed: {exc}") from exc
        logger.debug(f"Appended entry {entry.timestamp} to {self.path}")

    def load_all(self) -> List[JournalEntry]:
        """全エントリを古い順に返す。1行目はヘッダーとして無条件にスキップ。

        Raises:
            FileReadError: 読み込みに失敗した場合（ファイル不在・UTF-8でない内容を含む）
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = [line.rstrip("\n") for line in f]
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(f"Read failed: {exc}") from exc

        if len(lines) <= 1:
            return []
        return [self.codec.decode_entry(line) for line in lines[1:]]
