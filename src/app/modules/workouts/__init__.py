"""Workouts module - training logs owned by their users."""

from app.modules.workouts.routes import router


__module_info__ = {
    "name": "workouts",
    "version": "1.0.0",
    "description": "Workout logging",
    "dependencies": ["users", "exercises"],
}

__all__ = ["router"]
