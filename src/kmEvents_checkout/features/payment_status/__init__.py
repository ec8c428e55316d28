"""Payment status feature."""
