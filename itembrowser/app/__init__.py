"""Item browser flow controllers and composition."""
