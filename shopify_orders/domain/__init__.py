"""
Domain layer for the order access service.

Contains the immutable records decoded from Shopify responses and the
request-shaping value objects sent back to it.
"""
