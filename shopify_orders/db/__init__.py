"""Shopify GraphQL transport and documents."""
