from shopify_orders.cli import run

run()
