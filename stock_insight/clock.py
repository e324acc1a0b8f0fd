"""Zaman kaynağı soyutlaması.

Analizler duvar saatine doğrudan bağlı olmamalı; testlerde ve tekrar
üretilebilir raporlarda sabit bir "şimdi" enjekte edilir.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """ISO 8601 tarih metnini UTC'ye normalize edilmiş datetime'a çevirir.

    Saat dilimi bilgisi olmayan değerler UTC kabul edilir.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise TypeError(f"Tarih metin veya datetime olmalıdır: {value!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def days_between(earlier: datetime, later: datetime) -> float:
    """İki an arasındaki kesirli gün sayısı."""
    return (later - earlier).total_seconds() / 86400.0


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Her çağrıda aynı anı döndüren saat."""

    def __init__(self, moment: Union[str, datetime]):
        self._moment = parse_timestamp(moment)

    def now(self) -> datetime:
        return self._moment
