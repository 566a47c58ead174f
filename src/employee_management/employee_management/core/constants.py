"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DEPARTMENT_NAME = "Department Not Assigned"
NO_DEPARTMENT_BUCKET = "No Department"
FALLBACK_ROLE_DEPARTMENT = "Information Technology"

DEFAULT_SLOW_QUERY_MS = 100
DEFAULT_LIST_LIMIT = 500

MAX_DEPARTMENT_NAME_LENGTH = 50
MAX_DEPARTMENT_DESCRIPTION_LENGTH = 200

MAX_EMPLOYEE_NAME_LENGTH = 30
MAX_EMPLOYEE_EMAIL_LENGTH = 60
MAX_EMPLOYEE_ROLE_LENGTH = 30
MAX_EMPLOYEE_ADDRESS_LENGTH = 100
MAX_EMPLOYEE_GENDER_LENGTH = 10
