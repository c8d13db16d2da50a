"""
Core GraphQL queries shared by every client.
"""

# Shop information query, used as a connection check
SHOP_INFO_QUERY = """
query GetShopInfo {
  shop {
    id
    name
    currencyCode
  }
}
"""
