"""Local credential config for the object storage server."""
