"""
RoadGuard - road accident analytics service.

Turns a daily accident workbook into summaries, seasonal and weekday patterns,
factor correlations, per-day risk scores and short-term trend forecasts.
"""

__version__ = "0.1.0"
