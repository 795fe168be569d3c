"""
Data models for Review Combiner.
"""
