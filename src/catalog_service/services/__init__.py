"""Domain services built on the catalog client."""
