"""Application services (account state machine and auth orchestration)."""
