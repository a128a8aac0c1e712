"""Field Tracker package.

Employee attendance REST API: ID/PIN login, GPS check-in/check-out with
geofence verification, session tracking and daily summaries. Organized by
feature modules (employees, locations, attendance) with a thin Flask
controller layer over service/repository layers.
"""

__version__ = "1.0.0"
