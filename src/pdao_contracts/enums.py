"""Enumerations shared by the server and the client."""

from enum import Enum


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Suffix(str, Enum):
    NONE = ""
    JR = "Jr."
    SR = "Sr."
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"


class AddressType(str, Enum):
    PERMANENT = "Permanent"
    TEMPORARY = "Temporary"
    PRESENT = "Present"


class UserRole(str, Enum):
    """Roles a user account can hold. Registration always yields USER."""

    USER = "User"
    ADMIN = "Admin"
    SUPERVISOR = "Supervisor"
    STAFF = "Staff"


class UserStatus(str, Enum):
    """Account lifecycle states.

    Accounts start as PENDING and become ACTIVE on first successful login.
    SUSPENDED and INACTIVE are set by an administrative process.
    """

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    PENDING = "Pending"
