"""
codegen パッケージ — 記録アクションからのテストコード生成

主な構成:
  - generator: generate() 本体と Framework / Language / GenerationResult
  - strategies: (フレームワーク, 言語) ごとのレンダリング戦略
  - templates: アクション種別 → コード文のテンプレート表
"""

from __future__ import annotations

from .generator import Framework, GenerationResult, Language, generate

__all__ = ["Framework", "GenerationResult", "Language", "generate"]
