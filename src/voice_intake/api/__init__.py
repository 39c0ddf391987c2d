"""HTTP surface of the intake service."""
