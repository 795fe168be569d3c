"""
Review Combiner.

Merges scraped review batch files into a single deduplicated dataset.
"""

__version__ = "1.0.0"
