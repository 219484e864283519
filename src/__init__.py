"""
FleetGuard - Lease Rent & Violation Risk Service

A FastAPI-based service that derives weekly billing cycles, rent arrears,
violation exposure and risk tiers for vehicle-lease drivers, and ranks them
for collection.
"""

__version__ = "0.1.0"
