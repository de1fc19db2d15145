"""
Accident analytics engine.

Pure transformations over a chronological sequence of DailyRecord:

- Aggregator: totals, rates, month and weekday buckets, hourly heatmap
- CorrelationAnalyzer: pairwise Pearson correlation of five risk factors
- RiskScorer: weighted composite score and level per day
- SeasonalAnalyzer: cool / hot / rainy season buckets
- Forecaster: OLS trend over the trailing window with decaying confidence
- AnalyticsFacade: composes the above into the served views

Analyzers never log, retry or hold state between calls. They either return a
value or raise InsufficientData deterministically for the same input.
"""

__all__ = [
    "Aggregator",
    "AnalyticsFacade",
    "CorrelationAnalyzer",
    "Forecaster",
    "InsufficientData",
    "RiskScorer",
    "SeasonalAnalyzer",
]

from roadguard.engine.aggregator import Aggregator
from roadguard.engine.correlation import CorrelationAnalyzer
from roadguard.engine.errors import InsufficientData
from roadguard.engine.facade import AnalyticsFacade
from roadguard.engine.forecaster import Forecaster
from roadguard.engine.risk_scorer import RiskScorer
from roadguard.engine.seasonal import SeasonalAnalyzer
