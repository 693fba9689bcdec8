"""
Property-based tests for data models.

Tests universal properties of the completion flag, rows and progress.
"""

from hypothesis import given, strategies as st, assume
from models import Row, Progress, TRUTHY_TOKENS, parse_completed


def random_case(draw, token):
    flips = draw(st.lists(st.booleans(), min_size=len(token), max_size=len(token)))
    return "".join(c.upper() if flip else c for c, flip in zip(token, flips))


# Property 1: Truthy tokens are recognized in any case and with padding
@given(st.data(), st.sampled_from(TRUTHY_TOKENS), st.sampled_from(["", " ", "  ", "\t"]))
def test_truthy_tokens_any_case(data, token, padding):
    """
    For any truthy token, every upper/lower-case spelling, with surrounding
    whitespace, parses as completed.
    """
    value = padding + random_case(data.draw, token) + padding
    assert parse_completed(value) is True


# Property 2: Anything else parses as not completed
@given(st.text(max_size=10))
def test_other_values_not_completed(value):
    """
    For any text that is not a truthy token after trimming and lowercasing,
    the flag is False.
    """
    assume(value.strip().lower() not in TRUTHY_TOKENS)
    assert parse_completed(value) is False


# Property 3: Rows are assigned distinct identifiers
@given(st.integers(min_value=1, max_value=50))
def test_row_ids_distinct(count):
    """
    For any number of rows with identical values, every row_id is distinct
    and the rows still compare equal.
    """
    rows = [Row(sentence="s", abbreviation="A") for _ in range(count)]
    assert len({row.row_id for row in rows}) == count
    assert all(row == rows[0] for row in rows)


# Property 4: Exported record never carries the identifier
@given(st.booleans())
def test_record_has_no_identifier(completed):
    """
    For any row, to_record holds exactly the five exported columns with the
    flag rendered as true/false.
    """
    record = Row(completed=completed).to_record()
    assert list(record) == ["sentence", "abbreviation", "long_form", "domain", "completed"]
    assert record["completed"] == ("true" if completed else "false")


# Property 5: Percent is the half-up rounded ratio
@given(st.integers(min_value=1, max_value=10000).flatmap(
    lambda total: st.tuples(st.integers(min_value=0, max_value=total), st.just(total))
))
def test_percent_rounds_half_up(counts):
    """
    For any completed/total pair, percent lies within half a point of the
    exact ratio, rounding halves upward, and stays in 0..100.
    """
    completed, total = counts
    progress = Progress.from_counts(completed, total)

    assert 0 <= progress.percent <= 100
    # 2 * |100c/t - p| <= 1, halves go up
    assert -total <= 200 * completed - 2 * total * progress.percent < total
    assert progress.remaining_count == total - completed


# Property 6: Empty dataset has zero progress
@given(st.integers(min_value=0, max_value=100))
def test_empty_dataset_zero_percent(completed):
    """For a dataset without rows the percentage is 0."""
    assert Progress.from_counts(completed, 0).percent == 0
