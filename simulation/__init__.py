"""Session-owned state: the portfolio book and the agent telemetry simulator."""
