"""Short-lived GitHub App credentials: app JWTs and installation tokens."""
