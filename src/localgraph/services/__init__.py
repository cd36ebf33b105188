"""Services backing graph construction."""
