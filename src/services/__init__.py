"""Business rules, audit recording and ticket use cases.

Services are imported lazily by handlers so that no AWS client is created
at import time.
"""

# Do NOT import services here - use lazy loading in handlers instead
