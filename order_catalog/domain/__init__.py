"""
Domain layer: mapped entities and value objects.
"""
