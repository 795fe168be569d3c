"""
Utility modules for Review Combiner.

Cross-cutting concerns:
- Storage: File I/O helpers for batch files and combined output
"""
