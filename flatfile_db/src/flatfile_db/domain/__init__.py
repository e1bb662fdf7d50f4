"""Domain layer - schema entities, value objects and query rules."""
