import enum


class UserRole(str, enum.Enum):
    admin = "admin"
    researcher = "researcher"
    member = "member"
