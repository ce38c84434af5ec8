"""Grouping of past chats by age for the sidebar listing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

_SAMPLE_TOPICS: tuple[tuple[str, int], ...] = (
    ("Campaign Performance", 0),
    ("Audience Targeting", 1),
    ("Attribution Insights", 3),
    ("Ad Spend Optimization", 8),
    ("Fraud Prevention", 15),
    ("Cross-Channel Strategy", 20),
    ("ROAS Tracking", 25),
    ("Real-Time Analytics", 30),
    ("User Acquisition Trends", 35),
    ("Kochava Integrations", 40),
    ("CTV & OTT Advertising", 45),
    ("App Store Optimization", 50),
    ("Privacy-First Marketing", 55),
    ("Customer Retention", 60),
    ("Predictive Analytics", 65),
    ("Programmatic Advertising", 70),
    ("Geo-Targeted Campaigns", 75),
    ("Lookalike Audiences", 80),
    ("Incrementality Testing", 85),
    ("DSP & SSP Strategies", 90),
    ("Creative Optimization", 95),
    ("Data Clean Rooms", 100),
    ("Consent Management", 105),
    ("Media Mix Modeling", 110),
    ("Mobile Web vs. App", 115),
    ("Ad Viewability Metrics", 120),
    ("Engagement Benchmarks", 125),
    ("Affiliate Marketing", 130),
    ("Cost Per Action (CPA)", 135),
    ("Ad Fraud Alerts", 140),
)


@dataclass(frozen=True)
class SidebarChat:
    """A past conversation as listed in the sidebar."""

    id: int
    name: str
    date: date


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def group_chats(
    chats: Iterable[SidebarChat], today: date | None = None
) -> tuple[list[SidebarChat], list[SidebarChat], list[SidebarChat]]:
    """Split chats into (yesterday, previous 7 days, older), keeping order.

    A chat from exactly yesterday goes to the first group; any other chat
    newer than seven days ago, today's included, to the second; the rest
    to the third. *today* defaults to the current UTC date.
    """
    today = today if today is not None else _utc_today()
    yesterday = today - timedelta(days=1)
    week_ago = today - timedelta(days=7)

    yesterday_chats: list[SidebarChat] = []
    last_7_days: list[SidebarChat] = []
    older: list[SidebarChat] = []
    for chat in chats:
        if chat.date == yesterday:
            yesterday_chats.append(chat)
        elif chat.date > week_ago:
            last_7_days.append(chat)
        else:
            older.append(chat)
    return yesterday_chats, last_7_days, older


def sample_chats(today: date | None = None) -> list[SidebarChat]:
    """The placeholder chat history shown before real history exists."""
    today = today if today is not None else _utc_today()
    return [
        SidebarChat(id=number, name=name, date=today - timedelta(days=age))
        for number, (name, age) in enumerate(_SAMPLE_TOPICS, start=1)
    ]