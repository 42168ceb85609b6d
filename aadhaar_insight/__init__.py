"""
Aadhaar Insight Metrics.

Derived-metrics pipeline for the Aadhaar analytics dashboard: aggregation,
zone/risk ranking, ALI and anomaly interpretation, and policy simulation.
"""

__version__ = "1.0.0"
