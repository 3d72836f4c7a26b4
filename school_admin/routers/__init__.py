from . import health, auth, admissions, fees, students, teachers, notices, gallery, contact, notifications, admin

__all__ = [
    "health",
    "auth",
    "admissions",
    "fees",
    "students",
    "teachers",
    "notices",
    "gallery",
    "contact",
    "notifications",
    "admin",
]
