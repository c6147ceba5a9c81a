import os

TIMEZONE = os.getenv("TIMEZONE", "Asia/Karachi")
SYSTEM_LAUNCH_DATE = os.getenv("SYSTEM_LAUNCH_DATE", "")

FREE_LATES = os.getenv("FREE_LATES", "3")
COMMISSION_RATE = os.getenv("COMMISSION_RATE", "0.05")
CLAMP_NEGATIVE_TOTAL = os.getenv("CLAMP_NEGATIVE_TOTAL", "0")

GRACE_MINUTES = os.getenv("GRACE_MINUTES", "30")
LATE_THRESHOLD_MINUTES = os.getenv("LATE_THRESHOLD_MINUTES", "90")
MIN_TALK_SECONDS = os.getenv("MIN_TALK_SECONDS", "30")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False
