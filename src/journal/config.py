"""
設定管理モジュール

関連クラス:
  - repository.JournalRepository: journal_file を使用
  - cli.JournalCLI: タイマー秒数・表示件数を使用
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .ticker import DEFAULT_BREATH_PHASES

DEFAULT_CONFIG_PATH = Path("config") / "journal.yaml"


@dataclass
class JournalConfig:
    """アプリケーション設定クラス"""

    # ジャーナル設定
    journal_file: str = "journal.csv"
    review_default_count: int = 5

    # タイマー設定
    grounding_seconds: int = 60
    micro_breaths: int = 3
    breath_phases: List[Tuple[str, int]] = field(
        default_factory=lambda: list(DEFAULT_BREATH_PHASES)
    )

    # ログ設定（log_fileがNoneならstderrのみ）
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "JournalConfig":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/journal.yamlを使用）

        Returns:
            JournalConfig: 設定インスタンス

        Raises:
            FileNotFoundError: 設定ファイルが存在しない場合
        """
        config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        journal_data = yaml_data.get("journal", {}) or {}
        timer_data = yaml_data.get("timer", {}) or {}
        log_data = yaml_data.get("log", {}) or {}

        phases = timer_data.get("breath_phases")
        breath_phases = (
            [(str(label), int(seconds)) for label, seconds in phases]
            if phases
            else list(DEFAULT_BREATH_PHASES)
        )

        return cls(
            journal_file=journal_data.get("file", "journal.csv"),
            review_default_count=int(journal_data.get("review_default_count", 5)),
            grounding_seconds=int(timer_data.get("grounding_seconds", 60)),
            micro_breaths=int(timer_data.get("micro_breaths", 3)),
            breath_phases=breath_phases,
            log_level=log_data.get("level", "WARNING"),
            log_file=log_data.get("file"),
        )

    @classmethod
    def from_env(cls) -> "JournalConfig":
        """環境変数から設定を読み込む"""
        return cls(
            journal_file=os.getenv("GENTLE_DAY_JOURNAL_FILE", "journal.csv"),
            review_default_count=int(os.getenv("GENTLE_DAY_REVIEW_COUNT", "5")),
            grounding_seconds=int(os.getenv("GENTLE_DAY_GROUNDING_SECONDS", "60")),
            micro_breaths=int(os.getenv("GENTLE_DAY_MICRO_BREATHS", "3")),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            log_file=os.getenv("LOG_FILE") or None,
        )


def load_config(config_path: Optional[Path] = None) -> JournalConfig:
    """指定パス → config/journal.yaml → 環境変数 の順で設定を決定"""
    if config_path:
        return JournalConfig.from_yaml(Path(config_path))
    if DEFAULT_CONFIG_PATH.exists():
        return JournalConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return JournalConfig.from_env()
