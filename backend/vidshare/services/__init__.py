"""Application services: orchestration of use-cases over Units of Work."""
