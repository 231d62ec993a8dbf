"""Self-hosted photo gallery service."""
