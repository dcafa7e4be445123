import random

import pytest

from finance_engine.categories import aggregate_by_category, group_categories
from finance_engine.config import OTHER_BUCKET, UNCATEGORIZED
from finance_engine.models import CategoryBucket, Transaction


def _tx(id, amount, category, type='expense', date='2024-01-10'):
    return Transaction(id=id, amount=amount, type=type, category=category, date=date)


def _buckets(n):
    # Values n*10, (n-1)*10, ..., 10
    values = [10 * (n - i) for i in range(n)]
    total = sum(values)
    return [
        CategoryBucket(name=f'Cat{i}', value=v, percentage=v / total * 100, count=i + 1)
        for i, v in enumerate(values)
    ]


def test_aggregate_by_category_scenario():
    transactions = [
        _tx('1', 100, 'Food'),
        _tx('2', 50, 'Transport'),
        _tx('3', 20, 'Food'),
        _tx('4', 200, 'Salary', type='income'),
    ]
    result = aggregate_by_category(transactions)

    assert [b.name for b in result] == ['Food', 'Transport']
    food, transport = result
    assert food.value == pytest.approx(120)
    assert food.count == 2
    assert food.percentage == pytest.approx(70.588, abs=0.01)
    assert transport.value == pytest.approx(50)
    assert transport.percentage == pytest.approx(29.412, abs=0.01)


def test_negative_amounts_use_absolute_value():
    result = aggregate_by_category([_tx('1', -40, 'Food'), _tx('2', 10, 'Food')])
    assert result[0].value == pytest.approx(50)


def test_missing_and_empty_category_fall_back_to_uncategorized():
    result = aggregate_by_category([_tx('1', 10, None), _tx('2', 5, '')])
    assert len(result) == 1
    assert result[0].name == UNCATEGORIZED
    assert result[0].count == 2


def test_zero_value_categories_are_dropped():
    result = aggregate_by_category([_tx('1', 0, 'Gifts'), _tx('2', 0, 'Gifts'), _tx('3', 30, 'Food')])
    assert [b.name for b in result] == ['Food']
    assert result[0].percentage == pytest.approx(100)


def test_empty_inputs_give_empty_results():
    assert aggregate_by_category([]) == []
    assert aggregate_by_category(None) == []
    assert aggregate_by_category([_tx('1', 100, 'Salary', type='income')]) == []


def test_equal_values_keep_first_appearance_order():
    result = aggregate_by_category([_tx('1', 10, 'B'), _tx('2', 10, 'A')])
    assert [b.name for b in result] == ['B', 'A']


def test_category_totals_and_percentages_are_conserved():
    rng = random.Random(7)
    names = ['Food', 'Rent', 'Fun', 'Car', None, 'Health']
    transactions = [
        _tx(str(i), round(rng.uniform(-300, 300), 2), rng.choice(names), type=rng.choice(['expense', 'income']))
        for i in range(200)
    ]
    result = aggregate_by_category(transactions)
    expected = sum(abs(t.amount) for t in transactions if t.type == 'expense')

    assert sum(b.value for b in result) == pytest.approx(expected, abs=0.01)
    assert sum(b.percentage for b in result) == pytest.approx(100, abs=0.01)
    values = [b.value for b in result]
    assert values == sorted(values, reverse=True)


def test_group_categories_leaves_short_lists_unchanged():
    buckets = _buckets(8)
    assert group_categories(buckets) == buckets
    assert group_categories([]) == []
    assert group_categories(None) == []


def test_group_categories_folds_tail_into_other():
    buckets = _buckets(10)
    grouped = group_categories(buckets)

    assert len(grouped) == 9
    assert grouped[:8] == buckets[:8]
    other = grouped[-1]
    assert other.name == OTHER_BUCKET
    assert other.value == pytest.approx(20 + 10)
    assert other.count == 9 + 10
    total = sum(b.value for b in buckets)
    assert other.percentage == pytest.approx(30 / total * 100)



def test_group_categories_never_exceeds_nine_buckets():
    for n in (9, 12, 15):
        grouped = group_categories(_buckets(n))
        assert len(grouped) == 9
        assert grouped[-1].name == OTHER_BUCKET
        assert grouped[-1].value == pytest.approx(sum(b.value for b in _buckets(n)[8:]))


def test_group_categories_explicit_limit():
    grouped = group_categories(_buckets(5), limit=3)
    assert [b.name for b in grouped] == ['Cat0', 'Cat1', 'Cat2', OTHER_BUCKET]
    assert grouped[-1].value == pytest.approx(20 + 10)


def test_group_categories_keeps_largest_of_unsorted_input():
    buckets = _buckets(10)
    shuffled = buckets[5:] + buckets[:5]
    grouped = group_categories(shuffled)

    assert [b.name for b in grouped[:8]] == [f'Cat{i}' for i in range(8)]
    assert grouped[-1].value == pytest.approx(20 + 10)
    assert grouped[-1].count == 9 + 10
