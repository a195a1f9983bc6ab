"""Domain layer: the User aggregate and the shared error hierarchy."""
