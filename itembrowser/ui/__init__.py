"""Text-mode presentation layer for the item browser."""
