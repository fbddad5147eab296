from __future__ import annotations

from typing import Union

# Public domain tag -> key prefix. Same logic serves every content set.
CONTENT_DOMAINS: dict[str, str] = {
    "education": "education",
    "health-tips": "health_tips",
}

BookmarkSet = list[str]
# Percent is stored as sent (not clamped to 0..100).
ProgressMap = dict[str, Union[int, float]]
