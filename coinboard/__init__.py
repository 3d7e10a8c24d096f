"""
coinboard
~~~~~~~~~

Cryptocurrency dashboard:
- periodic collection of exchange quotes, network stats and community posts
- 10 minute price rollups and chart serialization
- a single page dashboard with a health endpoint
"""

__version__ = "0.1.0"
