"""
Blueprints package

IMPORTANT: DO NOT import routes here to avoid circular imports.
Each blueprint's __init__.py creates the blueprint object,
and routes.py imports and uses it.
"""
