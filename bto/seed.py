"""Sample records written when a data file does not exist yet."""

USER_HEADER = ["Name", "NRIC", "Age", "Marital Status", "Password"]

APPLICANTS = [
    ["John", "S1234567A", "35", "Single", "password"],
    ["Sarah", "T7654321B", "40", "Married", "password"],
    ["Grace", "S9876543C", "37", "Married", "password"],
    ["James", "T2345678D", "30", "Married", "password"],
    ["Rachel", "S3456789E", "25", "Single", "password"],
]

OFFICERS = [
    ["Daniel", "T2109876H", "36", "Single", "password"],
    ["Emily", "S6543210I", "28", "Single", "password"],
    ["David", "T1234567J", "29", "Married", "password"],
]

MANAGERS = [
    ["Michael", "T8765432F", "36", "Single", "password"],
    ["Jessica", "S5678901G", "26", "Married", "password"],
]

PROJECTS = [
    ["SUN001", "Sunrise Heights", "Yishun", "2-Room", "100", "350000", "3-Room", "150", "450000",
     "2026-09-01", "2027-03-31", "S5678901G", "5", "", "True"],
    ["GAR001", "Garden View", "Boon Lay", "2-Room", "80", "320000", "3-Room", "120", "420000",
     "2026-10-01", "2027-01-31", "T8765432F", "3", "", "True"],
    ["SKY001", "Skyline Residences", "Tampines", "2-Room", "150", "380000", "3-Room", "200", "480000",
     "2027-04-01", "2027-07-31", "S5678901G", "6", "", "False"],
]
