'''
    File Name: test_filters.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from core.filters import apply_filters, filter_by_period, matches, next_sort, sort_transactions
from models.filter_options import FilterOptions, SortConfig, SortDirection, SortField
from models.transaction import TransactionType
from conftest import make_tx


def test_empty_filters_accept_everything(scenario_a):
    assert FilterOptions().is_empty()
    assert all(matches(t, FilterOptions()) for t in scenario_a)
    assert apply_filters(scenario_a, FilterOptions()) == scenario_a
    assert apply_filters(scenario_a, None) == scenario_a


def test_matches_is_pure(scenario_a):
    f = FilterOptions(min_amount=250, type=TransactionType.EXPENSE)
    first = [matches(t, f) for t in scenario_a]
    second = [matches(t, f) for t in scenario_a]
    assert first == second == [False, True, False]


def test_min_amount_on_expenses(scenario_a):
    expenses = apply_filters(scenario_a, FilterOptions(type=TransactionType.EXPENSE))
    result = apply_filters(expenses, FilterOptions(min_amount=250))
    assert [t.amount for t in result] == [300]


def test_amount_bounds_are_inclusive(scenario_a):
    result = apply_filters(scenario_a, FilterOptions(min_amount=200, max_amount=300))
    assert [t.id for t in result] == ["a2", "a3"]


def test_zero_max_amount_is_a_constraint(scenario_a):
    assert apply_filters(scenario_a, FilterOptions(max_amount=0)) == []


def test_date_range_is_inclusive(scenario_a):
    f = FilterOptions(start_date="2024-01-15", end_date="2024-02-01")
    assert [t.id for t in apply_filters(scenario_a, f)] == ["a2", "a3"]
    assert [t.id for t in apply_filters(scenario_a, FilterOptions(end_date="2024-01-10"))] == ["a1"]


def test_name_and_category_are_case_insensitive_substrings():
    txs = [
        make_tx(10, "2024-01-01", name="Coffee Shop", category="Food"),
        make_tx(10, "2024-01-02", name="Gym", category="Health & FITNESS"),
    ]
    assert [t.name for t in apply_filters(txs, FilterOptions(name="coffee"))] == ["Coffee Shop"]
    assert [t.name for t in apply_filters(txs, FilterOptions(category="fitness"))] == ["Gym"]
    assert apply_filters(txs, FilterOptions(name="gym", category="food")) == []


def test_blank_text_is_no_constraint(scenario_a):
    assert apply_filters(scenario_a, FilterOptions(name="", category="")) == scenario_a


def test_type_filter(scenario_a):
    assert [t.id for t in apply_filters(scenario_a, FilterOptions(type=TransactionType.INCOME))] == ["a1"]


def test_constraints_combine_with_and(scenario_a):
    f = FilterOptions(type=TransactionType.EXPENSE, start_date="2024-02-01")
    assert [t.id for t in apply_filters(scenario_a, f)] == ["a3"]


def test_filters_preserve_input_order(scenario_a):
    reversed_input = list(reversed(scenario_a))
    assert apply_filters(reversed_input, FilterOptions(min_amount=1)) == reversed_input


def test_filter_by_period(scenario_a):
    assert [t.id for t in filter_by_period(scenario_a, "2024-01-01", "2024-01-31")] == ["a1", "a2"]


def test_sort_by_amount_and_date(scenario_a):
    by_amount = sort_transactions(scenario_a, SortConfig(SortField.AMOUNT, SortDirection.ASC))
    assert [t.amount for t in by_amount] == [200, 300, 1000]
    by_date = sort_transactions(scenario_a, SortConfig(SortField.DATE, SortDirection.DESC))
    assert [t.date for t in by_date] == ["2024-02-01", "2024-01-15", "2024-01-10"]


def test_sort_inactive_keeps_order(scenario_a):
    assert sort_transactions(scenario_a, SortConfig()) == scenario_a
    assert sort_transactions(scenario_a, SortConfig(SortField.AMOUNT, None)) == scenario_a


def test_sort_ties_keep_input_order():
    txs = [make_tx(5, "2024-01-01", tx_id="x"), make_tx(5, "2024-01-02", tx_id="y")]
    desc = sort_transactions(txs, SortConfig(SortField.AMOUNT, SortDirection.DESC))
    assert [t.id for t in desc] == ["x", "y"]


def test_next_sort_cycles():
    s = next_sort(SortConfig(), SortField.DATE)
    assert s == SortConfig(SortField.DATE, SortDirection.DESC)
    s = next_sort(s, SortField.DATE)
    assert s == SortConfig(SortField.DATE, SortDirection.ASC)
    s = next_sort(s, SortField.DATE)
    assert s == SortConfig()
    # switching columns starts again from descending
    s = next_sort(SortConfig(SortField.DATE, SortDirection.ASC), SortField.AMOUNT)
    assert s == SortConfig(SortField.AMOUNT, SortDirection.DESC)
