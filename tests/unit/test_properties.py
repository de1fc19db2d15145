"""
Property-based tests using Hypothesis for the RoadGuard analytics engine.

These tests check invariants that must hold for any record sequence:
totals independent of ordering, bounded coefficients and confidences,
non-negative forecasts and monotone risk scores.
"""

import hypothesis.strategies as st
from hypothesis import given, settings

from roadguard.engine.aggregator import Aggregator
from roadguard.engine.correlation import CorrelationAnalyzer, pearson
from roadguard.engine.forecaster import Forecaster, step_confidence
from roadguard.engine.risk_scorer import RiskScorer
from roadguard.engine.seasonal import SeasonalAnalyzer
from roadguard.models.enums import RiskInput, RiskLevel
from tests.conftest import make_record, make_records

counts = st.integers(min_value=0, max_value=500)

# Record factory keyword for each weighted risk input
RISK_INPUT_KWARGS = {
    RiskInput.TOTAL_ACCIDENTS: "total_accidents",
    RiskInput.DRINK_DRIVING: "drink_driving_count",
    RiskInput.YOUTH: "youth_total",
    RiskInput.NO_HELMET: "no_helmet_count",
    RiskInput.NO_SEATBELT: "no_seatbelt_count",
    RiskInput.DEATHS: "deaths",
}


@st.composite
def record_series(draw, min_size=1, max_size=60):
    """Consecutive daily records with random accident and death counts."""
    accidents = draw(st.lists(counts, min_size=min_size, max_size=max_size))
    deaths = draw(st.lists(st.integers(0, 50), min_size=len(accidents), max_size=len(accidents)))
    drink = draw(st.lists(st.integers(0, 100), min_size=len(accidents), max_size=len(accidents)))
    return make_records(accidents, deaths=deaths, drink_driving_count=drink)


# =============================================================================
# Aggregator Property Tests
# =============================================================================


@given(data=st.data())
@settings(max_examples=50, deadline=None)
def test_prop_summary_totals_ignore_order(data):
    """Sums do not depend on the order records are presented in."""
    records = data.draw(record_series())
    shuffled = data.draw(st.permutations(records))
    a = Aggregator().summarize(records)
    b = Aggregator().summarize(shuffled)
    assert a.total_accidents == b.total_accidents
    assert a.total_deaths == b.total_deaths
    assert a.drink_driving == b.drink_driving
    assert a.total_accidents == sum(r.total_accidents for r in records)


@given(records=record_series())
@settings(max_examples=50, deadline=None)
def test_prop_weekday_and_season_buckets_partition_records(records):
    """Every record lands in exactly one weekday and one season."""
    day_patterns = Aggregator().day_patterns(records)
    seasons = SeasonalAnalyzer().analyze(records)
    assert sum(p.count for p in day_patterns) == len(records)
    assert sum(b.count for b in seasons) == len(records)
    assert sum(p.total_accidents for p in day_patterns) == sum(r.total_accidents for r in records)


@given(records=record_series())
@settings(max_examples=50, deadline=None)
def test_prop_heatmap_cells_non_negative(records):
    rows = Aggregator().weekday_hour_heatmap(records)
    assert all(cell >= 0 for row in rows for cell in row.hours)


# =============================================================================
# Correlation Property Tests
# =============================================================================


@given(
    x=st.lists(st.integers(-1000, 1000), min_size=0, max_size=50),
    data=st.data(),
)
@settings(max_examples=100, deadline=None)
def test_prop_pearson_bounded_and_symmetric(x, data):
    """Coefficient stays in [-1, 1] and is symmetric in its arguments."""
    y = data.draw(st.lists(st.integers(-1000, 1000), min_size=len(x), max_size=len(x)))
    r = pearson(x, y)
    assert -1.0 <= r <= 1.0
    assert abs(r - pearson(y, x)) < 1e-9


@given(records=record_series())
@settings(max_examples=30, deadline=None)
def test_prop_correlation_matrix_complete(records):
    results = CorrelationAnalyzer().analyze(records)
    assert len(results) == 10
    assert len({r.pair.key for r in results}) == 10
    assert all(-1.0 <= r.coefficient <= 1.0 for r in results)


# =============================================================================
# RiskScorer Property Tests
# =============================================================================


@given(
    risk_input=st.sampled_from(list(RiskInput)),
    base=st.integers(0, 200),
    bump=st.integers(0, 200),
    others=st.integers(0, 50),
)
@settings(max_examples=100)
def test_prop_risk_score_monotone(risk_input, base, bump, others):
    """Raising any weighted count never lowers the score or the level."""
    scorer = RiskScorer()
    fields = {name: others for name in RISK_INPUT_KWARGS.values()}
    field = RISK_INPUT_KWARGS[risk_input]
    low = make_record(**{**fields, field: base})
    high = make_record(**{**fields, field: base + bump})
    assert scorer.compute_score(high) >= scorer.compute_score(low)
    levels = list(RiskLevel)
    assert levels.index(scorer.classify(scorer.compute_score(high))) >= levels.index(
        scorer.classify(scorer.compute_score(low))
    )


# =============================================================================
# Forecaster Property Tests
# =============================================================================


@given(step=st.integers(1, 500))
def test_prop_confidence_bounded_and_non_increasing(step):
    c = step_confidence(step)
    assert 0.6 <= c <= 0.9
    assert step_confidence(step + 1) <= c


@given(step=st.integers(1, 5))
def test_prop_confidence_strictly_decreasing_above_floor(step):
    """Each step before the 0.6 floor loses confidence."""
    assert step_confidence(step + 1) < step_confidence(step)


@given(step=st.integers(6, 500))
def test_prop_confidence_holds_at_floor(step):
    assert step_confidence(step) == 0.6


@given(records=record_series(min_size=2), days=st.integers(1, 120))
@settings(max_examples=50, deadline=None)
def test_prop_forecast_non_negative_and_capped(records, days):
    """Predictions are whole non-negative counts; horizon never exceeds the cap."""
    result = Forecaster(window_size=30, max_horizon=90).forecast(records, days=days)
    assert len(result.points) == min(days, 90)
    assert len(result.historical) == min(len(records), 30)
    for point in result.points:
        assert point.predicted_accidents >= 0
        assert point.predicted_deaths >= 0
        assert point.date > records[-1].date
