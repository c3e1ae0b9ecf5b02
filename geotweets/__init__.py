"""
geotweets: filter, join, summarize and sample geotagged posts for mapping.
"""

__version__ = "0.1.0"
