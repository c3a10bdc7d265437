"""Constants for taskFit.

This module centralizes all magic numbers and default values used throughout the application.
"""

from taskfit.models.task import TaskCategory
from taskfit.models.user import MobilityLevel


# Priority score bounds
MAX_PRIORITY_SCORE = 100
HIGH_PRIORITY_THRESHOLD = 70

# Time urgency points by days until due (first matching bound wins)
URGENCY_OVERDUE_POINTS = 50  # due today or overdue (< 1 day)
URGENCY_BANDS = (
    (3, 35),
    (7, 20),
)
URGENCY_DISTANT_POINTS = 10

# Category weight points
CATEGORY_POINTS = {
    TaskCategory.BILL.value: 30,
    TaskCategory.BENEFIT.value: 25,
    TaskCategory.APPOINTMENT.value: 20,
    TaskCategory.REMINDER.value: 10,
    TaskCategory.OTHER.value: 5,
}
DEFAULT_CATEGORY_POINTS = 5

# Weather risk: (rain chance strictly above, points), highest first
RAIN_RISK_BANDS = (
    (70, 10),
    (40, 5),
)

# Traffic risk: (delay minutes strictly above, points), highest first
DELAY_RISK_BANDS = (
    (30, 10),
    (15, 5),
)

# Travel time
BASELINE_TRAVEL_MINUTES = 30
SENIOR_AGE = 60
SENIOR_TRAVEL_FACTOR = 1.3
MOBILITY_TRAVEL_FACTORS = {
    MobilityLevel.INDEPENDENT.value: 1.0,
    MobilityLevel.NEEDS_ASSISTANCE.value: 1.5,
    MobilityLevel.WHEELCHAIR.value: 1.8,
    MobilityLevel.LIMITED_MOBILITY.value: 1.8,
}

# Weather safety
HEAVY_RAIN_CHANCE = 70
WEATHER_SAFETY_AGE = 65

# Context cache windows (seconds)
WEATHER_CACHE_TTL_SEC = 30 * 60
TRAFFIC_CACHE_TTL_SEC = 15 * 60

# Default lookup locations when a task has none
DEFAULT_WEATHER_LOCATION = "Quezon City,PH"
DEFAULT_TRAFFIC_LOCATION = "Quezon City, Manila"
