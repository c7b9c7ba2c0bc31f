"""
Pruto Modules
=============

Flask blueprint modules for the catalog backend, plus the API client.
"""

__all__ = ['products', 'users', 'cart', 'orders', 'public_api', 'ops']
