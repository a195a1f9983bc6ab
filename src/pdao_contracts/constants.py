"""Field limits and patterns of the registration contract."""

import re

NAME_MAX_LENGTH = 50
STREET_MAX_LENGTH = 200
LOCALITY_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
AGE_MAX = 150

DEFAULT_COUNTRY = "Philippines"

CONTACT_NUMBER_PATTERN = re.compile(r"^09\d{9}$")
ZIP_CODE_PATTERN = re.compile(r"^\d{4}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
USER_ID_PATTERN = re.compile(r"^PDAO-\d{8}-[A-Z0-9]{5}$")
FORM_ID_PATTERN = re.compile(r"^FORM-\d{8}-[A-Z0-9]{5}$")

CONTACT_NUMBER_MESSAGE = (
    "Phone number must be exactly 11 digits starting with 09 (09XXXXXXXXX)"
)
FORM_ID_MESSAGE = "form_id is automatically generated and cannot be provided"

# Human labels used when a required field is missing altogether
FIELD_LABELS: dict[str, str] = {
    "first_name": "First name",
    "middle_name": "Middle name",
    "last_name": "Last name",
    "suffix": "Suffix",
    "sex": "Sex",
    "age": "Age",
    "date_of_birth": "Date of birth",
    "address": "Address",
    "address.street": "Street",
    "address.barangay": "Barangay",
    "address.city_municipality": "City/Municipality",
    "address.province": "Province",
    "address.region": "Region",
    "address.zip_code": "ZIP code",
    "address.country": "Country",
    "address.type": "Address type",
    "contact_number": "Contact number",
    "email": "Email",
    "password": "Password",
    "confirm_password": "Confirm password",
    "current_password": "Current password",
    "new_password": "New password",
    "avatar_url": "Avatar URL",
}
