"""Utilities for sklmbkmeans."""

from ._sampling import weighted_sample_with_replacement
from .discovery import all_displays, all_estimators, all_functions

__all__ = [
	"all_estimators",
	"all_displays",
	"all_functions",
	"weighted_sample_with_replacement",
]
