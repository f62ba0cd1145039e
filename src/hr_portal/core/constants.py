"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LIST_LIMIT = 500

MAX_AVATAR_BYTES = 5 * 1024 * 1024
# Request body cap: one avatar plus multipart framing.
MAX_REQUEST_BYTES = MAX_AVATAR_BYTES + 64 * 1024
AVATAR_BUCKET = "employee-avatars"

DEFAULT_SENDER = "HR TEAM <onboarding@resend.dev>"
INVITATION_SENDER = "HR System <hr@yourcompany.com>"
SIGNATURE = "HR TEAM"
TEST_EMAIL_SUBJECT = "Test email from HR Portal"

# Resend allows roughly 2 requests per second.
DEFAULT_THROTTLE_SECONDS = 0.6
