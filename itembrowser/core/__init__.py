"""Item browser domain models."""
