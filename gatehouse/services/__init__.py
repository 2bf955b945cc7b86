"""Business services for Gatehouse."""
