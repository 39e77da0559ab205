"""Workout adaptation: applies a plan week to a concrete workout."""

from periodization_engine.adaptation.workout_adapter import WorkoutAdapter

__all__ = ["WorkoutAdapter"]
