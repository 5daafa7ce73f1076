"""Service Layer — orchestrates fetch and validation around the pure core."""
