"""スクレイピング処理の例外定義."""


class ScrapeError(Exception):
    """書籍情報取得の失敗."""


class InvalidURLError(ScrapeError):
    """対象外の URL（ドメイン違い・商品ID不正）."""


class FetchError(ScrapeError):
    """ページ取得（通信・キャッシュ読み込み）の失敗."""


class ParseError(ScrapeError):
    """ページ構造が想定と異なり抽出できない."""


class PricePatternError(ParseError):
    """価格表記が想定パターンに一致しない.

    他の ParseError と異なり1件の失敗では済ませず、バッチ全体を中断させる。
    """
