# strategic_performance/constants.py
"""
Constants for Strategic Plan Performance Scoring

VERSION: 1.2.0
CHANGELOG:
- v1.2.0: Added BAND_COLORS for report layers (synced with dashboard palette)
- v1.1.0: Added MEASUREMENT_FREQUENCY_PERIODS for data-entry completion rates
- v1.0.0: Canonical 12-method table, retired the legacy 4-method set
"""

# =====================================================================
# CALCULATION METHOD FAMILIES
# =====================================================================

# Used when an indicator has no (or an unknown) calculation method
DEFAULT_CALCULATION_METHOD = 'cumulative_increasing'

# achieved = baseline + sum
INCREASING_METHODS = ('cumulative', 'cumulative_increasing', 'increasing')

# achieved = baseline - sum
DECREASING_METHODS = ('cumulative_decreasing', 'decreasing')

# Cumulative family - quarter targets split cumulatively (25/50/75/100)
CUMULATIVE_METHODS = INCREASING_METHODS + DECREASING_METHODS

# achieved = average of periods, higher is better
AVERAGE_INCREASING_METHODS = (
    'percentage',
    'percentage_increasing',
    'maintenance',
    'maintenance_increasing',
)

# achieved = average of periods, lower is better
AVERAGE_DECREASING_METHODS = ('percentage_decreasing', 'maintenance_decreasing')

AVERAGE_METHODS = AVERAGE_INCREASING_METHODS + AVERAGE_DECREASING_METHODS

# =====================================================================
# PERFORMANCE BANDS
# =====================================================================

# Lower bound (inclusive) of each band, checked from the top down
BAND_THRESHOLDS = [
    ('exceeding_target', 115.0),
    ('excellent', 85.0),
    ('good', 70.0),
    ('moderate', 55.0),
    ('weak', 45.0),
    ('very_weak', 0.0),
]

BAND_LABELS = {
    'exceeding_target': 'Exceeding Target',
    'excellent': 'Excellent',
    'good': 'Good',
    'moderate': 'Moderate',
    'weak': 'Weak',
    'very_weak': 'Very Weak',
}

BAND_COLORS = {
    'exceeding_target': '#9333ea',  # Purple
    'excellent': '#15803d',         # Dark Green
    'good': '#22c55e',              # Green
    'moderate': '#eab308',          # Yellow
    'weak': '#dc2626',              # Red
    'very_weak': '#b45309',         # Amber
}

# =====================================================================
# ROLLUP SETTINGS
# =====================================================================

# Per-indicator contribution ceiling inside weighted goal averages only
ROLLUP_PROGRESS_CAP = 200.0

# Impact weights are declared as percentages of the goal
FULL_WEIGHT = 100.0

# =====================================================================
# PERIOD DEFINITIONS
# =====================================================================

QUARTERS = [1, 2, 3, 4]

# Cumulative quarter targets as a fraction of the yearly target
CUMULATIVE_QUARTER_FRACTIONS = [0.25, 0.50, 0.75, 1.00]

# Non-cumulative: every quarter carries an equal share
EQUAL_QUARTER_FRACTION = 0.25

MEASUREMENT_FREQUENCY_PERIODS = {
    'monthly': 12,
    'quarterly': 4,
    'semi_annual': 2,
    'annual': 1,
}

# =====================================================================
# MEASUREMENT APPROVAL
# =====================================================================

APPROVED_STATUS = 'approved'
