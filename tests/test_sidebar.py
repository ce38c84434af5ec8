from datetime import date, timedelta

import pytest

from hayride.sidebar import SidebarChat, group_chats, sample_chats

TODAY = date(2024, 6, 15)


def _chat(number, age):
    return SidebarChat(id=number, name=f"chat {number}", date=TODAY - timedelta(days=age))


def test_yesterday_group_holds_only_yesterday():
    chats = [_chat(1, 1), _chat(2, 2)]
    yesterday, week, older = group_chats(chats, TODAY)
    assert yesterday == [chats[0]]
    assert week == [chats[1]]
    assert older == []


def test_today_counts_as_previous_seven_days():
    chat = _chat(1, 0)
    yesterday, week, older = group_chats([chat], TODAY)
    assert week == [chat]
    assert yesterday == [] and older == []


@pytest.mark.parametrize("age, group", [(6, 1), (7, 2), (8, 2)])
def test_seven_day_boundary(age, group):
    chat = _chat(1, age)
    groups = group_chats([chat], TODAY)
    assert groups[group] == [chat]


def test_future_dates_go_to_recent_group():
    chat = SidebarChat(id=1, name="later", date=TODAY + timedelta(days=3))
    _, week, _ = group_chats([chat], TODAY)
    assert week == [chat]


def test_grouping_is_a_partition_preserving_order():
    chats = sample_chats(TODAY)
    yesterday, week, older = group_chats(chats, TODAY)
    assert sorted(c.id for c in yesterday + week + older) == [c.id for c in chats]
    for group in (yesterday, week, older):
        ids = [c.id for c in group]
        assert ids == sorted(ids)


def test_sample_chat_groups():
    yesterday, week, older = group_chats(sample_chats(TODAY), TODAY)
    assert [c.name for c in yesterday] == ["Audience Targeting"]
    assert [c.name for c in week] == ["Campaign Performance", "Attribution Insights"]
    assert older[0].name == "Ad Spend Optimization"
    assert older[-1].name == "Ad Fraud Alerts"


def test_sample_chats_ids_and_dates():
    chats = sample_chats(TODAY)
    assert [c.id for c in chats] == list(range(1, len(chats) + 1))
    assert chats[0].date == TODAY
    assert chats[-1].date == TODAY - timedelta(days=140)
    dates = [c.date for c in chats]
    assert dates == sorted(dates, reverse=True)
    assert len({c.name for c in chats}) == len(chats)


def test_group_chats_accepts_generator():
    chats = [_chat(n, n) for n in range(10)]
    groups = group_chats((c for c in chats), TODAY)
    assert sum(len(g) for g in groups) == len(chats)


def test_empty_input():
    assert group_chats([], TODAY) == ([], [], [])


def test_default_today_is_consistent():
    yesterday, week, older = group_chats(sample_chats())
    assert [c.name for c in yesterday] == ["Audience Targeting"]
    assert "Campaign Performance" in [c.name for c in week]