"""Constants shared by the qualification code.

These constants are imported by other modules:
- COMPLETED / EXPIRED / DUE: completion statuses, used in qualifications/models.py,
  qualifications/impact.py and qualifications/statistics.py
- DEFAULT_X_OF_Y_COUNT: used in qualifications/requirements.py
- REQUIRED_FOR_ALL: used in qualifications/statistics.py
"""

__all__ = [
    "COMPLETED",
    "DEFAULT_X_OF_Y_COUNT",
    "DUE",
    "EXPIRED",
    "REQUIRED_FOR_ALL",
]

# Completion statuses as delivered by the sync layer
COMPLETED = "completed"
EXPIRED = "expired"
DUE = "due"

# X_OF_Y groups stored without a count require two children
DEFAULT_X_OF_Y_COUNT = 2

# Marker in Training.required_for meaning "required for every division"
REQUIRED_FOR_ALL = "Required"
