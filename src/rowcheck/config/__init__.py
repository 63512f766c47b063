"""Configuration: pydantic settings loaded from env, .env or YAML."""
