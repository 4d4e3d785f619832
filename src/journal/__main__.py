"""GentleDay ジャーナルCLI実行用エントリポイント

Usage:
    python -m src.journal [--today|--weekly|--help]
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
