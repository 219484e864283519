"""
Fixed business constants for the FleetGuard billing engine.

These are contractual rules and are not read from the environment.
"""

# Processing fee charged per demerit point when the lessor clears a violation.
VIOLATION_POINT_FEE = 200

# Total debt at or above this is a severe risk.
SEVERE_DEBT_THRESHOLD = 1300

# Rent is paid in four weekly installments per monthly cycle.
INSTALLMENTS_PER_CYCLE = 4
DAYS_PER_PERIOD = 7

# Zero-based day offsets (from the bill date) of the first three weekly
# checkpoints. The fourth sits on the last day of the cycle.
WEEKLY_DUE_OFFSETS = (6, 13, 20)

# Deprecated single-threshold highlight rules.
LEGACY_RENT_TOTAL_THRESHOLD = 1000
LEGACY_TOTAL_DEBT_THRESHOLD = 1200

# Sort weights, one tier each.
RANK_WEIGHT_DUE_TODAY = 1_000_000
RANK_WEIGHT_DUE_TOMORROW = 500_000
RANK_WEIGHT_SEVERE = 50_000
RANK_WEIGHT_HIGH = 10_000
