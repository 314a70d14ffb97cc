"""紀伊國屋書店 書籍情報取得 — メインエントリーポイント.

処理フロー:
  1. コマンドライン引数から商品ページ URL を受け取る
  2. 全 URL を並行に取得・パース（キャッシュ利用）
  3. 結果を標準出力に表示し、book_info.txt に保存
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime
from pathlib import Path

from bookinfo.config import CACHE_DIR, LOG_DIR, OUTPUT_FILE
from bookinfo.errors import ScrapeError
from bookinfo.models import Book, format_books
from bookinfo.scraper import scrape


def setup_logging() -> None:
    """ロギングの初期設定."""
    log_file = LOG_DIR / f"bookinfo_{datetime.now().strftime('%Y%m%d')}.log"
    # 標準出力は結果表示に使うのでログは stderr へ
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def save(books: list[Book], path: Path) -> None:
    """結果をテキストファイルに保存する."""
    Path(path).write_text(format_books(books), encoding="utf-8")


def run(urls: list[str]) -> None:
    """メイン処理.

    Raises:
        ScrapeError: いずれかの URL で取得に失敗した場合（ファイルは保存しない）
    """
    if not urls:
        return

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("=== 書籍情報取得 開始 === (%d 件)", len(urls))
    start_time = time.time()

    books = scrape(urls, CACHE_DIR)

    print(format_books(books))
    save(books, OUTPUT_FILE)

    elapsed = time.time() - start_time
    logger.info("=== 書籍情報取得 完了 ===")
    logger.info("保存先: %s, 件数: %d, 所要時間: %.1f 秒", OUTPUT_FILE, len(books), elapsed)


def main() -> None:
    try:
        run(sys.argv[1:])
    except ScrapeError as e:
        logging.getLogger(__name__).error("書籍情報取得に失敗しました: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
