"""商品ページ取得モジュール.

取得戦略:
  1. キャッシュディレクトリに <商品ID>.html があればそれを使う（通信しない）
  2. なければ Web から取得し、キャッシュへ保存してから返す
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
import tempfile
from pathlib import Path

import requests

from bookinfo.config import REQUEST_TIMEOUT, USER_AGENT
from bookinfo.errors import FetchError

logger = logging.getLogger(__name__)


def fetch_page(url: str) -> bytes:
    """商品ページの HTML を Web から取得する.

    Raises:
        FetchError: 通信エラー・HTTP エラー時
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept-Language": "ja,en-US;q=0.9,en;q=0.8",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }

    try:
        resp = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.error("商品ページ取得失敗: url=%s, error=%s", url, e)
        raise FetchError(f"商品ページ取得失敗: {url}") from e
    return resp.content


def cache_path(book_id: str, cache_dir: Path) -> Path:
    return Path(cache_dir) / f"{book_id}.html"


def get_or_fetch(book_id: str, url: str, cache_dir: Path) -> bytes:
    """キャッシュがあれば読み込み、なければ取得してキャッシュに保存する.

    キャッシュの鮮度は確認しない。保存の失敗は警告ログのみで握りつぶす。
    """
    path = cache_path(book_id, cache_dir)
    if path.exists():
        try:
            content = path.read_bytes()
        except OSError as e:
            raise FetchError(f"キャッシュ読み込み失敗: {path}") from e
        logger.info("キャッシュ使用: %s", path)
        return content

    content = fetch_page(url)
    _write_cache(path, content)
    return content


def _write_cache(path: Path, content: bytes) -> None:
    """キャッシュへの書き込み（ベストエフォート）.

    一時ファイルに書いてから置き換えるので、途中で失敗しても
    不完全な <商品ID>.html は残らない。
    """
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        logger.warning("キャッシュ保存失敗（無視して続行）: %s, error=%s", path, e)
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        return
    logger.info("キャッシュ保存: %s (%d bytes)", path, len(content))


def load_html(book_id: str, url: str, cache_dir: Path) -> io.BytesIO:
    """パーサに渡すための HTML ストリームを返す."""
    Path(cache_dir).mkdir(parents=True, exist_ok=True)
    return io.BytesIO(get_or_fetch(book_id, url, cache_dir))
