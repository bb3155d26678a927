"""Game constants for the trick-taking core."""

# Deck
DECK_SIZE = 36
TOTAL_DECK_POINTS = 120  # Sum of point values over a full deck
SUPPORTED_PLAYER_COUNTS = (2, 4, 6)

# Card value thresholds
HIGH_VALUE_THRESHOLD = 5  # Cards worth more than this are "high value"
LOW_VALUE_THRESHOLD = 3  # Cards worth less than this are "low value"
RATING_HIGH_VALUE_THRESHOLD = 3  # Evaluator treats > 3 points as a high card

# Stakes
HIGH_STAKE_THRESHOLD = 10  # Stakes above this are "high"
SCORE_GAP_THRESHOLD = 20  # Score differential that counts as ahead/behind

# Game phases (fraction of the match completed)
EARLY_PHASE_LIMIT = 0.33
MID_PHASE_LIMIT = 0.66

# Opponent memory
METRIC_MIN = -1.0
METRIC_MAX = 1.0
MIN_ACTIONS_FOR_PREDICTABILITY = 3
PREDICTABILITY_PATTERN_WEIGHT = 0.4
PREDICTABILITY_CONSISTENCY_WEIGHT = 0.4
PREDICTABILITY_VARIANCE_WEIGHT = 0.2
PREDICTABILITY_TRIGGER = 0.7

# Trait evolution
TRAIT_MIN = 0.0
TRAIT_MAX = 100.0
TRAIT_DEFAULT = 50.0
TRAIT_STEP = 5.0
TRAIT_CORRECTION = 0.8
TRAIT_FAILURE_STREAK = 3
TRAIT_JITTER = 5.0

# Move rating
RATING_MIN = 1
RATING_MAX = 10
RATING_DEFAULT = 5
GOOD_MOVE_RATING = 7
BAD_MOVE_RATING = 3

# First-round team bonuses
TRUMP_THREE_BONUS = 20
RANK_SUPERIORITY_BONUS = 10
