"""Journalのカスタム例外定義

ファイルI/Oの失敗はここで定義した例外に包んで送出し、
CLI側で捕捉してエラー出力に報告する（処理は継続）。
パース時の異常（不正なtimestamp・気分値）は例外にせず、未記録として扱う。
"""


class JournalError(Exception):
    """Journal基底例外"""

    pass


class JournalStoreError(JournalError):
    """journal.csv へのアクセスエラー"""

    pass


class FileCreateError(JournalStoreError):
    """ファイル作成（ヘッダー書き込み）の失敗"""

    pass


class FileWriteError(JournalStoreError):
    """エントリ追記の失敗"""

    pass


class FileReadError(JournalStoreError):
    """ファイル読み込みの失敗"""

    pass
