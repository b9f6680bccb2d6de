"""Convert Shopee product links in free text into affiliate short links."""
