"""Domain entities and their persistence models."""
