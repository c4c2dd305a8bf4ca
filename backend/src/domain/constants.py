"""
Domain Constants

This module contains constant definitions valid across the domain layer.
"""

# Supported competitions (API-Football league ids)
COMPETITIONS = [
    {"id": 39, "code": "PL", "name": "Premier League", "api_league_id": 39},
    {"id": 135, "code": "SA", "name": "Serie A", "api_league_id": 135},
    {"id": 140, "code": "PD", "name": "La Liga", "api_league_id": 140},
    {"id": 61, "code": "L1", "name": "Ligue 1", "api_league_id": 61},
    {"id": 78, "code": "BL1", "name": "Bundesliga", "api_league_id": 78},
    {"id": 88, "code": "DED", "name": "Eredivisie", "api_league_id": 88},
    {"id": 283, "code": "RO1", "name": "Superliga", "api_league_id": 283},
    {"id": 284, "code": "RO2", "name": "Liga 2", "api_league_id": 284},
]

# Number of recent fixtures used for form
RECENT_FORM_LIMIT = 5

# Scoreline grid: goals 0..MAX_GOALS for each side
MAX_GOALS = 7

# Expected-goal clamp band
LAMBDA_MIN = 0.4
LAMBDA_MAX = 3.2

# Weak prior when season statistics are unavailable
FALLBACK_LAMBDA_HOME = 1.35
FALLBACK_LAMBDA_AWAY = 1.25
FALLBACK_SIGNAL = 0.3

# League-average venue rates used when a team has no matches in that venue
DEFAULT_HOME_GOALS_FOR = 1.4
DEFAULT_HOME_GOALS_AGAINST = 1.2
DEFAULT_AWAY_GOALS_FOR = 1.3
DEFAULT_AWAY_GOALS_AGAINST = 1.2

# Home advantage
HOME_ADVANTAGE = 1.10
AWAY_PENALTY = 0.95

# Form factor
FORM_BASELINE_GOALS = 1.3
FORM_CONCEDED_FLOOR = 0.3
FORM_FACTOR_MIN = 0.6
FORM_FACTOR_MAX = 1.4

# Matches across both teams that saturate the sample-size signal
SAMPLE_SIZE_SATURATION = 40

# Confidence weighting
WEIGHT_DATA_QUALITY = 0.35
WEIGHT_SAMPLE_SIZE = 0.25
WEIGHT_CLARITY = 0.25
WEIGHT_RECENT_FORM = 0.15
CLARITY_REFERENCE_GAP = 40.0

# Reported confidence band and label thresholds (percent)
CONFIDENCE_MIN = 25
CONFIDENCE_MAX = 75
CONFIDENCE_HIGH_THRESHOLD = 60
CONFIDENCE_MEDIUM_THRESHOLD = 40
