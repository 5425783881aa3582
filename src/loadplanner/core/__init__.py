"""
core — data models, validation schemas, geometry and the per-container ledger.
"""
