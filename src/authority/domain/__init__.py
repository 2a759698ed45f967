"""Domain layer: entities, exceptions, collaborator interfaces and services."""
