"""Moving-cost estimation service."""
