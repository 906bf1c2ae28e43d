"""Shared constants for TUI modules.

Centralizes the user-facing strings of the output panel and copy action.
"""

from __future__ import annotations

# Output panel
OUTPUT_PLACEHOLDER = "ここに結果が表示されます。"
OUTPUT_FIX_INPUT = "入力内容を確認してください。"

# Copy status
COPY_SUCCEEDED = "コピーしました。"
COPY_FAILED = "コピーに失敗しました。"
COPY_STATUS_SECONDS = 2.0

# Buttons
GENERATE_LABEL = "生成"
COPY_LABEL = "コピー"
OUTPUT_TITLE = "JSON 出力"

# Status bar label per session phase, keyed by SessionPhase value
PHASE_LABELS = {
    "pristine": "未入力",
    "incremental": "入力中",
    "full_disclosure": "全項目チェック",
    "output": "生成済み",
}

# Enum dropdown placeholder
ENUM_PLACEHOLDER = "選択してください"

JSON_INDENT = 2
