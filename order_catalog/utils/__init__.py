"""
Shared helpers: grouping, batched loading and error types.
"""
