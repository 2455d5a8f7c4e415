"""Day Planner backend."""
