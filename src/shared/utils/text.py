"""
Текстовые утилиты: slug, выдержка, нормализация времени.
"""

import re
import unicodedata
from datetime import datetime, timezone
from typing import Optional

_SEPARATORS = re.compile(r"[\s_-]+")
_TAGS = re.compile(r"<[^>]*>")


def utcnow() -> datetime:
    """Текущее время UTC без tzinfo (колонки хранят naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Привести datetime с часовым поясом к naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def slugify(text: str) -> str:
    """
    Построить URL-safe slug.

    Сохраняет буквы, цифры и комбинируемые знаки любого алфавита
    (бенгальские гласные знаки относятся к категории M), поэтому
    "খেলার খবর" → "খেলার-খবর", а "Team Wins!" → "team-wins".
    """
    text = unicodedata.normalize("NFC", text or "").lower().strip()
    kept = []
    for char in text:
        category = unicodedata.category(char)
        if category[0] in ("L", "M", "N") or char in " _-" or char.isspace():
            kept.append(char)
    slug = _SEPARATORS.sub("-", "".join(kept))
    return slug.strip("-")


def extract_excerpt(content: str, length: int = 150) -> str:
    """Выдержка из HTML контента без тегов."""
    plain = _TAGS.sub("", content or "").strip()
    if len(plain) > length:
        return plain[:length] + "..."
    return plain
