"""Task Planner backend package."""
