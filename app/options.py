# app/options.py
# Fixed option lists shared by the form layer, the catalog and the engine.

ALL_INDIA = "All India"

STATES = [
    ALL_INDIA,
    "Andhra Pradesh",
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Chhattisgarh",
    "Goa",
    "Gujarat",
    "Haryana",
    "Himachal Pradesh",
    "Jharkhand",
    "Karnataka",
    "Kerala",
    "Madhya Pradesh",
    "Maharashtra",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Odisha",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tamil Nadu",
    "Telangana",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
    "Andaman and Nicobar Islands",
    "Chandigarh",
    "Dadra and Nagar Haveli and Daman and Diu",
    "Delhi",
    "Jammu and Kashmir",
    "Ladakh",
    "Lakshadweep",
    "Puducherry",
]

# ordered, lowest first
EDUCATION_LEVELS = [
    "No formal education",
    "Primary",
    "Class 8",
    "Class 10",
    "Class 12",
    "Diploma",
    "Undergraduate",
    "Postgraduate",
    "PhD",
]

OCCUPATIONS = [
    "Student",
    "Farmer",
    "Self-employed",
    "Salaried",
    "Unemployed",
    "Daily wage worker",
    "Artisan",
    "Entrepreneur",
    "Homemaker",
    "Retired",
]

SCHEME_TYPES = [
    "scholarship",
    "pension",
    "loan",
    "subsidy",
    "insurance",
    "housing",
    "skill",
    "grant",
]

AMOUNT_FREQUENCIES = ["one-time", "monthly", "yearly"]
