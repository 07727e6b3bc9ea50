"""
ArtifactWriter — 生成物のファイル保存

生成したテストコードや記録ログのエクスポートを出力ディレクトリへ保存する。
出力ディレクトリは存在しなければ作成し、同名ファイルは上書きする。

書き込み先は出力ディレクトリ配下に限る。絶対パスや ".." で配下から外れる
ファイル名は ValueError とする。
書き込み失敗（権限エラー等）は OSError のまま呼び出し元へ伝播する。
リトライはしない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "generated-tests"


@dataclass
class ArtifactWriter:
    """生成物をファイルとして保存するライター。

    Attributes:
        output_dir: 出力ディレクトリ（相対パスはカレントディレクトリ基準）
    """

    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)

    def write(self, file_name: str, text: str) -> Path:
        """テキストをファイルの全内容として書き込む。

        Args:
            file_name: 出力ファイル名（出力ディレクトリからの相対パス）
            text: 書き込む内容

        Returns:
            書き込んだファイルの絶対パス

        Raises:
            ValueError: ファイル名が出力ディレクトリの外を指す場合
            OSError: ディレクトリ作成・書き込みに失敗した場合
        """
        root = self.output_dir.resolve()
        path = (root / file_name).resolve()
        if path == root or not path.is_relative_to(root):
            raise ValueError(f"出力ディレクトリの外には書き込めません: {file_name}")

        path.parent.mkdir(parents=True, exist_ok=True)

        path.write_text(text, encoding="utf-8")

        logger.info("ファイルを保存しました: %s", path)
        return path
