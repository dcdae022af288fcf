"""
Core data layer.

This package contains:
- normalize: matching keys for area names and search queries
- data_loader: fetch, parse and validate the semicolon-delimited dataset
- query_engine: resolve a search string to suggestions and one selection
- comparison: classify a municipality against the KOKO MAA baseline
- formatting: fi-FI number and percentage rendering
- state: application state, transitions and the derived view
"""
