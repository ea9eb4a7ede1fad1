"""Cross-service building blocks: DTOs, errors, ports and the service base."""
