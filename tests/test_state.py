'''
    File Name: test_state.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from core.state import AppState
from models.filter_options import FilterOptions, SortConfig, SortDirection, SortField
from models.transaction import TransactionType
from conftest import make_tx


def test_default_state_is_empty():
    state = AppState()
    assert state.visible() == []
    assert state.dashboard().totals.total_balance == 0


def test_transitions_return_new_state(scenario_a):
    state = AppState()
    loaded = state.with_transactions(scenario_a)
    assert state.transactions == ()
    assert loaded.transactions == tuple(scenario_a)


def test_with_updated_replaces_by_id(scenario_a):
    state = AppState().with_transactions(scenario_a)
    edited = make_tx(350, "2024-01-15", name="Groceries", category="Food", tx_id="a2")
    new_state = state.with_updated(edited)
    assert new_state.find("a2").amount == 350
    assert state.find("a2").amount == 300
    assert [t.id for t in new_state.transactions] == ["a1", "a2", "a3"]


def test_without_removes_by_id(scenario_a):
    state = AppState().with_transactions(scenario_a).without("a1")
    assert [t.id for t in state.transactions] == ["a2", "a3"]
    assert state.find("a1") is None


def test_filters_feed_aggregates(scenario_a):
    state = AppState().with_transactions(scenario_a).with_filters(FilterOptions(type=TransactionType.EXPENSE))
    totals = state.dashboard().totals
    assert (totals.total_income, totals.total_expenses, totals.total_balance) == (0.0, 500.0, -500.0)
    assert state.with_filters(None).filters == FilterOptions()


def test_sort_only_affects_visible_rows(scenario_a):
    state = AppState().with_transactions(scenario_a).with_sort(SortField.AMOUNT)
    assert state.sort == SortConfig(SortField.AMOUNT, SortDirection.DESC)
    assert [t.amount for t in state.visible()] == [1000, 300, 200]
    assert [t.id for t in state.filtered()] == ["a1", "a2", "a3"]
