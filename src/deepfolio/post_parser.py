from __future__ import annotations

import re
from typing import List

from .models import UNKNOWN_DATE, DatedPost


# 2024-07-26: Launched project X
POST_DATE_PATTERN = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2}):\s*(.*)")


def _parse_line(line: str) -> DatedPost | None:
    m = POST_DATE_PATTERN.match(line)
    if m:
        date, text = m.group(1), m.group(2)
    else:
        date, text = UNKNOWN_DATE, line
    if not text:
        return None
    return DatedPost(date=date, text=text)


def parse_posts(raw_text: str) -> List[DatedPost]:
    """
    One record per non-blank line. A leading "YYYY-MM-DD:" becomes the date;
    lines without it are kept whole with date "unknown". Never raises.
    """
    lines = [ln.strip() for ln in (raw_text or "").split("\n")]
    out: List[DatedPost] = []
    for ln in lines:
        if not ln:
            continue
        post = _parse_line(ln)
        if post is not None:
            out.append(post)
    return out


def posts_as_json_ready(posts: List[DatedPost]) -> List[dict]:
    return [p.model_dump() for p in posts]
