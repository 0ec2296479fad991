"""Financial constants and default assumptions for goal projections.

All rates are annual and expressed as decimals (0.07 means 7%). Rates are
converted to monthly by dividing by COMPOUNDING_PERIODS_PER_YEAR.
"""

from decimal import Decimal


# =============================================================================
# RETURN RATES (ANNUAL)
# =============================================================================

# High-yield savings account
HYSA_RATE = Decimal("0.045")

# Historical stock market real return (after inflation)
STOCK_MARKET_REAL_RETURN = Decimal("0.07")

# Short-term goals held in ordinary savings
CONSERVATIVE_RATE = Decimal("0.04")

# Blend of savings and market exposure (529 plans, family funds)
BLENDED_RATE = Decimal("0.05")

# Donor-advised funds and gift savings
DONOR_ADVISED_RATE = Decimal("0.035")

# Paying down debt earns nothing
NO_GROWTH_RATE = Decimal("0")


# =============================================================================
# INFLATION
# =============================================================================

DEFAULT_INFLATION_RATE = Decimal("0.03")


# =============================================================================
# TIME AND LIMITS
# =============================================================================

COMPOUNDING_PERIODS_PER_YEAR = 12

# Projection horizon: 50 years. Goals not reached by then are unreachable.
MAX_PROJECTION_MONTHS = 600

CENT = Decimal("0.01")


# =============================================================================
# PROFILE DEFAULTS
# =============================================================================

# Split applied when a single expenses figure is given instead of needs/wants
DEFAULT_NEEDS_SHARE = Decimal("0.7")
DEFAULT_WANTS_SHARE = Decimal("0.3")
