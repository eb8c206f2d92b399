"""Query services built on top of the integrations."""
