"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- 紀伊國屋書店 ---
BASE_URL = "https://www.kinokuniya.co.jp"
BOOK_ID_PREFIX = "dsg"

# --- User-Agent ---
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

# --- リクエスト設定 ---
# 未設定ならタイムアウトなし
_timeout = os.environ.get("BOOKINFO_REQUEST_TIMEOUT")
REQUEST_TIMEOUT: float | None = float(_timeout) if _timeout else None

# --- キャッシュ・出力 ---
CACHE_DIR = Path(os.environ.get("BOOKINFO_CACHE_DIR", ".cache"))
OUTPUT_FILE = Path(os.environ.get("BOOKINFO_OUTPUT_FILE", "book_info.txt"))

# --- 抽出 ---
AUTHOR_SEPARATOR = "、"
ISBN_PREFIX_LENGTH = 5  # "ISBN:" の長さ

# --- ログ ---
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_DIR.mkdir(exist_ok=True)
