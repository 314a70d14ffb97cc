"""データモデル定義."""

from __future__ import annotations

from dataclasses import dataclass

from bookinfo.errors import ScrapeError


@dataclass
class Book:
    """書籍ページ1件分の抽出結果を表す.

    error が設定されている場合、他のフィールドは意味を持たない。
    """

    title: str = ""
    author: str = ""  # 著者名を「、」で連結したもの
    price: int = 0  # 本体価格（円）
    publisher: str = ""
    isbn: str = ""  # "ISBN:" を除いた値
    error: ScrapeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_text(self) -> str:
        """1冊分を5行のテキストにする."""
        return (
            f"{self.title}\n{self.author}\n{self.price}\n"
            f"{self.publisher}\nISBN: {self.isbn}"
        )


def format_books(books: list[Book]) -> str:
    """複数冊を空行区切りのテキストにする."""
    return "\n\n".join(book.to_text() for book in books)
