'''
    File Name: test_recurrence.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from dataclasses import replace

import pytest

import config
from core.recurrence import add_months, expand
from conftest import make_tx


@pytest.fixture
def template():
    return make_tx(49.9, "2024-01-15", name="Gym", category="Health", description="monthly fee", tx_id="tpl")


def test_zero_repeat_returns_single_copy(template):
    result = expand(template, 0)
    assert len(result) == 1
    assert result[0].id != template.id
    assert replace(result[0], id=template.id) == template


def test_expand_produces_monthly_copies(template):
    result = expand(template, 3)
    assert [t.date for t in result] == ["2024-01-15", "2024-02-15", "2024-03-15", "2024-04-15"]
    for t in result:
        assert (t.name, t.category, t.amount, t.type, t.description) == (
            template.name, template.category, template.amount, template.type, template.description,
        )


def test_expand_months_strictly_increase_across_year_end():
    result = expand(make_tx(10, "2024-11-30"), 4)
    months = [t.date[:7] for t in result]
    assert months == ["2024-11", "2024-12", "2025-01", "2025-02", "2025-03"]
    assert months == sorted(set(months))


def test_expand_assigns_fresh_unique_ids(template):
    ids = [t.id for t in expand(template, 12)]
    assert len(set(ids)) == 13
    assert template.id not in ids


def test_month_end_is_clamped():
    result = expand(make_tx(10, "2024-01-31"), 1)
    assert result[1].date == "2024-02-29"


def test_clamping_does_not_accumulate():
    result = expand(make_tx(10, "2023-01-31"), 3)
    assert [t.date for t in result] == ["2023-01-31", "2023-02-28", "2023-03-31", "2023-04-30"]


def test_add_months():
    assert add_months("2024-02-29", 12) == "2025-02-28"
    assert add_months("2024-05-10", 0) == "2024-05-10"


def test_max_repeat_allowed(template):
    assert len(expand(template, config.MAX_REPEAT_MONTHS)) == config.MAX_REPEAT_MONTHS + 1


@pytest.mark.parametrize("bad", [-1, config.MAX_REPEAT_MONTHS + 1, 1.5, "3", True])
def test_invalid_repeat_count_rejected(template, bad):
    with pytest.raises(ValueError):
        expand(template, bad)
