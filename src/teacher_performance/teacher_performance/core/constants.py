"""Scoring weights and defaults.

Note: Sub-score maxima add up to MAX_TOTAL_SCORE.
"""

ATTENDANCE_WEIGHT = 3.5
PUNCTUALITY_WEIGHT = 2.5
TEST_AVERAGE_WEIGHT = 5.5
SURVEY_WEIGHT = 6.0
TEST_RETURN_WEIGHT = 1.5
CHECKING_QUALITY_WEIGHT = 1.0

MAX_TOTAL_SCORE = 20.0

# Benefit-of-doubt average when no exam marks exist for the teacher.
FALLBACK_TEST_PERCENTAGE = 100.0

BETTER_CHECKING_POINTS = 1.0
GOOD_CHECKING_POINTS = 0.7
BAD_CHECKING_POINTS = 0.0

DEFAULT_ON_TIME_GRACE_MINUTES = 15
DEFAULT_FLEXIBILITY_EXTRA_MINUTES = 5
DEFAULT_RETURN_FLEXIBILITY_DAYS = 3
DEFAULT_MAX_WORKERS = 4
DEFAULT_TOP_N = 3
SUMMARY_TEACHER_LIMIT = 5

DEFAULT_CREATED_BY = "System"
