import os

SECRET_KEY = os.getenv("SECRET_KEY", "test-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ADMIN_API_KEY = os.getenv("ADMIN_API_KEY", "test-admin-key")

RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
NOTIFICATION_SENDER = os.getenv("NOTIFICATION_SENDER", "")
ADMIN_NOTIFICATION_EMAIL = os.getenv("ADMIN_NOTIFICATION_EMAIL", "")
# No pauses between sends under test
NOTIFICATION_THROTTLE_SECONDS = float(os.getenv("NOTIFICATION_THROTTLE_SECONDS", "0"))
SITE_URL = os.getenv("SITE_URL", "http://localhost:5000")

S3_CONFIG = {
    "endpoint_url": os.getenv("S3_ENDPOINT_URL", ""),
    "access_key_id": os.getenv("S3_ACCESS_KEY_ID", ""),
    "secret_access_key": os.getenv("S3_SECRET_ACCESS_KEY", ""),
    "region": os.getenv("S3_REGION", "us-east-1"),
    "bucket_name": os.getenv("S3_BUCKET", "employee-avatars"),
    "public_base_url": os.getenv("S3_PUBLIC_BASE_URL", ""),
}
