"""Flask blueprint package for the invoice dashboard.

Blueprints are defined in the sibling modules (``invoice_routes`` and
``auth_routes``) and registered in :func:`dashboard.create_app`.
"""
