"""Photography studio gallery service."""
