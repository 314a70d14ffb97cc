"""書籍情報の一括取得モジュール.

URL ごとに「商品ID検証 → ページ取得 → パース」を1スレッドで並行実行し、
結果は入力順に揃えて返す。
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from bookinfo.config import BASE_URL, BOOK_ID_PREFIX
from bookinfo.errors import InvalidURLError, PricePatternError, ScrapeError
from bookinfo.fetcher import load_html
from bookinfo.models import Book
from bookinfo.parser import parse_html

logger = logging.getLogger(__name__)


def extract_book_id(url: str) -> str:
    """URL 末尾のパス要素から商品ID（dsg-...）を取り出す.

    Raises:
        InvalidURLError: 紀伊國屋書店の URL でない、または商品IDが不正な場合
    """
    if not url.startswith(BASE_URL):
        raise InvalidURLError(f"対象外の URL です: {url!r}")
    book_id = url.split("/")[-1]
    if not book_id.startswith(BOOK_ID_PREFIX):
        raise InvalidURLError(f"商品IDが不正です: {book_id!r}")
    return book_id


def scrape_each(url: str, cache_dir: Path) -> Book:
    """1冊分の書籍情報を取得する.

    失敗は book.error に格納して返す。ただし PricePatternError は
    バッチ全体を止めるため送出する。
    """
    book = Book()
    try:
        book_id = extract_book_id(url)
        html = load_html(book_id, url, cache_dir)
        parse_html(html, book)
    except PricePatternError:
        logger.error("価格が読み取れないため処理を中断します: url=%s", url)
        raise
    except ScrapeError as e:
        logger.warning("取得失敗: url=%s, error=%s", url, e)
        return Book(error=e)

    logger.info("取得完了: %s (%s)", book.title, book.isbn)
    return book


def scrape(urls: list[str], cache_dir: Path) -> list[Book]:
    """全 URL を並行に処理し、入力順の書籍リストを返す.

    1件でも失敗があれば、入力順で最初の失敗を送出する（部分的な結果は返さない）。
    PricePatternError はどの URL で起きても即座に送出する。
    未完了のタスクの終了は待たない。

    Raises:
        ScrapeError: いずれかの URL で失敗した場合
    """
    Path(cache_dir).mkdir(parents=True, exist_ok=True)
    if not urls:
        return []

    executor = ThreadPoolExecutor(max_workers=len(urls))
    try:
        futures = [executor.submit(scrape_each, url, cache_dir) for url in urls]

        books: list[Book] = []
        for future in futures:
            _wait_in_order(future, futures)
            book = future.result()
            if not book.ok:
                raise book.error
            books.append(book)
    finally:
        # 実行中のタスクは中断しないが、終了も待たない
        executor.shutdown(wait=False)

    logger.info("全 %d 件の取得が完了", len(books))
    return books


def _wait_in_order(target: Future, futures: list[Future]) -> None:
    """target の完了を待つ。その間に他のタスクで送出された例外があれば即座に送出する."""
    while True:
        for future in futures:
            if future.done() and future.exception() is not None:
                raise future.exception()
        if target.done():
            return
        wait([f for f in futures if not f.done()], return_when=FIRST_COMPLETED)
