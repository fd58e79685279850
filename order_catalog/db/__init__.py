"""
Data store access: connection management, repositories and sample data.
"""
