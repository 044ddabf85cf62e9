"""Debug verbosity level constants.

These are informational; the reporter compares raw integers. The emit rule is:

    level <= verbosity  ->  message is shown

Odd steps leave room for callers that want an in-between level.
"""

DBG_NONE = 0        # Always shown (unless verbosity is negative)
DBG_LOW = 1         # Top-level progress
DBG_MED = 3         # Per-item progress, chosen settings
DBG_HIGH = 5        # Internal state
DBG_VHIGH = 7       # Loop iterations, intermediate values
DBG_VVHIGH = 9
DBG_VVVHIGH = 11
DBG_VVVVHIGH = 13   # Everything

DBG_DEFAULT = DBG_NONE
