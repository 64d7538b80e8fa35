"""Domain layer: period windows and repository protocols."""
