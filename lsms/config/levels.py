"""
Academic level configuration
Each level owns a disjoint block of roll numbers and one partition file.
Edit this file to add/remove levels or subjects as needed.
"""

from enum import Enum


class Level(str, Enum):
    L200 = "200"
    L300 = "300"
    L400 = "400"


# Scan order for cross-level lookups
LEVELS = [Level.L200, Level.L300, Level.L400]

# Inclusive roll number range per level
ROLL_RANGES = {
    Level.L200: (1, 199),
    Level.L300: (200, 299),
    Level.L400: (300, 400),
}

# Partition file name per level
PARTITION_FILES = {
    Level.L200: "students lv 200.json",
    Level.L300: "students lv 300.json",
    Level.L400: "students lv 400.json",
}

# Subjects that count towards a student's average
TRACKED_MARK_FIELDS = ["SWE210_mark", "MAE101_mark", "SWE200_mark"]

# Lecturer / OTP / admin files
LECTURER_FILE = "Lecturer.json"
LOAD_LECTURER_FILE = "load_lecturer.json"
OTP_FILE = "otp_temp.json"
ADMIN_FILE = "administrator.json"
