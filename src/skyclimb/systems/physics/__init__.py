"""Player integration."""
