"""紀伊國屋書店 商品ページのパースモジュール.

抽出戦略:
  - 和書（パンくずに「和書」を含む）: infobox 内のリストから価格・出版社を取得
  - 洋書: pricebox（版ごとの価格ブロック）を全て見て最安値を採用し、
    出版社は先頭の pricebox から取得
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag

from bookinfo.config import AUTHOR_SEPARATOR, ISBN_PREFIX_LENGTH
from bookinfo.errors import ParseError, PricePatternError
from bookinfo.models import Book

logger = logging.getLogger(__name__)

# 例: （本体¥3,900）
_PRICE_PATTERN = re.compile(r"（本体¥([\d,]+)）")

# 全角英数字・記号 (U+FF01〜U+FF5E) → 半角
_ZENKAKU_ALNUM_TABLE = str.maketrans(
    {chr(code): chr(code - 0xFEE0) for code in range(0xFF01, 0xFF5F)}
)
# 全角スペース → 半角
_ZENKAKU_SPACE_TABLE = str.maketrans({"\u3000": " "})


def sanitize(text: str) -> str:
    """前後の空白を除去し、全角英数字・全角スペースを半角に揃える."""
    text = text.strip()
    text = text.translate(_ZENKAKU_ALNUM_TABLE)
    return text.translate(_ZENKAKU_SPACE_TABLE)


def parse_html(html, book: Book) -> None:
    """商品ページ HTML から書籍情報を抽出し book に書き込む.

    Args:
        html: HTML 文字列・バイト列またはファイルライクオブジェクト
        book: 書き込み先

    Raises:
        ParseError: ページ構造が想定と異なる場合
        PricePatternError: 価格表記が想定と異なる場合
    """
    soup = BeautifulSoup(html, "html.parser")

    h3 = soup.find("h3")
    book.title = sanitize(h3.get_text()) if h3 else ""

    infobox = soup.select_one(".infobox")
    if infobox is None:
        raise ParseError("infobox が見つかりません")
    author_li = infobox.find("li")
    if author_li is None:
        raise ParseError("infobox 内に li が見つかりません")

    authors = [sanitize(a.get_text()) for a in author_li.find_all("a")]
    book.author = AUTHOR_SEPARATOR.join(authors)

    if is_japanese_book(soup):
        _parse_japanese_book(author_li, book)
    else:
        _parse_foreign_book(soup, book)

    identifier = soup.select_one('li[itemprop="identifier"]')
    isbn_raw = identifier.get("content") if identifier else None
    if not isbn_raw:
        raise ParseError("ISBN が見つかりません")
    if len(isbn_raw) <= ISBN_PREFIX_LENGTH:
        raise ParseError(f"ISBN が短すぎます: {isbn_raw!r}")
    book.isbn = isbn_raw[ISBN_PREFIX_LENGTH:]


def is_japanese_book(soup: BeautifulSoup) -> bool:
    """パンくずリストに「和書」があれば和書とみなす."""
    return any("和書" in ul.get_text() for ul in soup.select("ul.pankuzu"))


def _parse_japanese_book(author_li: Tag, book: Book) -> None:
    # 著者の2つ後が価格、その次が出版社
    price_li = _next_tag(_next_tag(author_li))
    book.price = parse_price(price_li)
    book.publisher = parse_publisher(_next_tag(price_li))


def _parse_foreign_book(soup: BeautifulSoup, book: Book) -> None:
    boxes = soup.select(".pricebox")
    if not boxes:
        raise ParseError("pricebox が見つかりません")

    for i, box in enumerate(boxes):
        first_li = box.find("li")
        if first_li is None:
            raise ParseError("pricebox 内に li が見つかりません")

        price = parse_price(first_li)
        if i == 0 or price < book.price:
            book.price = price
        # 出版社は最安値の版に関係なく先頭の pricebox から取る
        if i == 0:
            book.publisher = parse_publisher(_next_tag(first_li))

    logger.debug("pricebox %d 件中の最安値: %d", len(boxes), book.price)


def parse_price(tag: Tag) -> int:
    """「（本体¥3,900）」形式の表記から本体価格を取り出す.

    Raises:
        PricePatternError: 表記が一致しない場合
    """
    text = tag.get_text()
    m = _PRICE_PATTERN.search(text)
    if not m:
        raise PricePatternError(f"価格表記のパターンに一致しません: {text.strip()!r}")
    return int(m.group(1).replace(",", ""))


def parse_publisher(tag: Tag) -> str:
    """直下の子要素のテキストを連結して出版社名とする."""
    text = "".join(child.get_text() for child in tag.find_all(recursive=False))
    return sanitize(text)


def _next_tag(tag: Tag) -> Tag:
    """次の兄弟要素を返す（テキストノードは飛ばす）."""
    sibling = tag.find_next_sibling()
    if sibling is None:
        raise ParseError(f"<{tag.name}> の次の要素が見つかりません")
    return sibling
