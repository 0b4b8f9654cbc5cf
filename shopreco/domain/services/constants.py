# Constants for the recommendation pipeline.
DEFAULT_LIMIT = 5  # Recommendations returned when the caller gives no limit

# Default scoring weights (overridable through settings)
AFFINITY_WEIGHT = 2.0  # Candidate shares a category the user already touched
POPULARITY_DIVISOR = 100.0  # popularity / divisor is added to every score
PURCHASE_WEIGHT = 0.5
CART_WEIGHT = 0.3
VIEW_WEIGHT = 0.1

# Interaction summary sent to the explanation generator
NO_HISTORY_SUMMARY = "New user with no previous interactions"
MINIMAL_ACTIVITY_SUMMARY = "Minimal activity"
