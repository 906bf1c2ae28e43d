"""formjson: validate form fields and convert them to a JSON object.

Usage:
    python -m formjson                      # Interactive form (basic variant)
    python -m formjson tui --variant lottery
    python -m formjson convert --set name=山田太郎 --set age=30 ...
"""

from __future__ import annotations

__version__ = "1.0.0"
