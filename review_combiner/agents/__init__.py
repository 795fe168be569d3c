"""
Pipeline stages for Review Combiner.

Contains the modules that process review records:
- Record Loader
- Deduplicator
- Order Resolver
- Date Interpolator
- Format Converter
- Statistics
- Batch Collector (producer side)
"""
