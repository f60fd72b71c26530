"""Landing detection."""
