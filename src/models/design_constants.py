"""Strength-design coefficients for flexural section design (SI / MPa units)."""

# Strength reduction and stress block
PHI_FLEXURE = 0.9            # Strength reduction factor applied to nominal capacity
WHITNEY_COEFF = 0.85         # Equivalent stress block intensity: 0.85 * fc

# Ductility limit: alpha_max = ALPHA_MAX_NUMERATOR / (STEEL_STRAIN_STRESS + fy)
ALPHA_MAX_NUMERATOR = 267.75
STEEL_STRAIN_STRESS = 630.0  # Es * epsilon_cu in MPa, also caps compression steel stress
COVER_STRAIN_FACTOR = 0.85   # fs' = 630 * (y_max - 0.85 * cover) / y_max

# Section capacity bound on the resistance coefficient
RESISTANCE_COEFF_LIMIT = 0.5

# Reinforcement limits
MIN_STEEL_COEFF = 0.9        # As_min = (0.9 / fy) * b * d
BALANCED_COEFF = 455.0       # rho_b factor: 455 / (630 + fy)
MAX_STEEL_RATIO = 0.75       # As_max = 0.75 * rho_b * (fc / fy) * b * d

# Defaults and detailing
DEFAULT_COVER_RATIO = 0.1    # cover = 10% of height when not given
MIN_BAR_COUNT = 2

# Units
KNM_TO_NMM = 1e6
AREA_UNIT = "mm2"

REINFORCEMENT_TENSION = "Tension"
REINFORCEMENT_DOUBLY = "Tension + Compression"
