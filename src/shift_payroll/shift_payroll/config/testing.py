import os

TIMEZONE = "Asia/Karachi"

# Pinned so month arithmetic in tests does not depend on today's date
SYSTEM_LAUNCH_DATE = os.getenv("SYSTEM_LAUNCH_DATE", "2024-01-01")

FREE_LATES = "3"
COMMISSION_RATE = "0.05"
CLAMP_NEGATIVE_TOTAL = "0"

GRACE_MINUTES = "30"
LATE_THRESHOLD_MINUTES = "90"
MIN_TALK_SECONDS = "30"

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
DEBUG = False
TESTING = True
