"""Tests for mdflash.models dataclasses."""

import dataclasses

import pytest

from mdflash.models import Card, CardType, CardUpdate, ReviewResponse, ScheduleInfo


def test_card_defaults():
    c = Card(front="q", back="a")
    assert c.type is CardType.BASIC
    assert c.context == []
    assert c.source_file == ""
    assert c.schedule is None
    assert c.is_due is False


def test_card_is_immutable(now):
    c = Card(front="q", back="a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.front = "other"
    updated = dataclasses.replace(c, schedule=ScheduleInfo(1, 250, now, is_due=True))
    assert updated.is_due
    assert c.schedule is None


def test_context_not_shared():
    assert Card(front="a", back="b").context is not Card(front="c", back="d").context


def test_enum_values():
    assert CardType("multi_line_reversed") is CardType.MULTI_LINE_REVERSED
    assert [r.value for r in ReviewResponse] == ["hard", "good", "easy"]
    assert ReviewResponse.GOOD == "good"


def test_card_update_back_optional(now):
    u = CardUpdate(front="q", schedule=ScheduleInfo(2, 250, now))
    assert u.back is None
