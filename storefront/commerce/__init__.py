"""Commerce module for Storefront.

This module contains the product catalog, the cart, order and search ledgers,
and the shop service that owns them and exposes the operations consumed by
the HTTP layer.
"""
