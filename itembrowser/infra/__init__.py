"""Infrastructure: environment and configuration loading."""
