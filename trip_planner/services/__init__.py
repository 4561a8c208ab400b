"""Business logic for trips, their owned resources, meta and flight lookup."""
