"""
Shared building blocks: error taxonomy, tri-state update fields, conversion helpers.
"""
