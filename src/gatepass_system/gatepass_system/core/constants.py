"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

REQUEST_ID_PREFIX = "REQ"
LOG_ID_PREFIX = "LOG"

DEFAULT_APPROVAL_REMARKS = "Approved"
DEFAULT_ENCODE_TIMEOUT_SECONDS = 10.0

# Verification outcomes shown to the gatekeeper
MSG_INVALID_QR = "Invalid QR data format"
MSG_PASS_NOT_FOUND = "Pass not found"
MSG_PASS_NOT_APPROVED = "Pass not approved"
MSG_PASS_USED = "Pass already used"
MSG_PASS_EXPIRED = "Pass expired"
MSG_PASS_VALID = "Valid pass"

COLOR_VALID = "green"
COLOR_INVALID = "red"
