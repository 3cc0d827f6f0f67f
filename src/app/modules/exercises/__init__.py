"""Exercises module - exercise catalog with per-user visibility."""

from app.modules.exercises.routes import router


__module_info__ = {
    "name": "exercises",
    "version": "1.0.0",
    "description": "Exercise catalog with public and private exercises",
    "dependencies": ["users"],
}

__all__ = ["router"]
