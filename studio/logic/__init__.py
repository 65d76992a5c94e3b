"""Core business logic layer.

Subpackages:
- prompts: prompt templating for plans, exercise images and ads
- parsing: model text -> Plan
- enrichment: immutable merge and the sequential per-exercise image pass
- batch: concurrent ad image batches
- rendering: Plan -> page view model
"""
__all__ = ["prompts", "parsing", "enrichment", "batch", "rendering"]
