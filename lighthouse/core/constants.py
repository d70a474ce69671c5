"""Lighthouse constants and thresholds.

All magic numbers live here. No exceptions.
"""

# Retry policy
MAX_RETRIES = 3              # Failed attempts before an action is parked as failed

# Cleanup
RETENTION_DAYS = 7           # Synced actions older than this are purged

# Delivery
HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
DEFAULT_HEADERS = {"Content-Type": "application/json"}
DEFAULT_REQUEST_TIMEOUT_MS = 10000

# Connectivity probe
DEFAULT_PROBE_HOST = "localhost"
DEFAULT_PROBE_PORT = 8765
DEFAULT_PROBE_TIMEOUT_S = 5.0
DEFAULT_POLL_INTERVAL_S = 30.0

# Recovery
INTERRUPTED_MESSAGE = "interrupted before delivery completed"
