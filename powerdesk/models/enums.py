"""Enum definitions for meters and readings."""

from enum import Enum


class MeterType(str, Enum):
    """Kind of electricity measurement point."""

    MAIN = "main"
    DG = "dg"  # Backup diesel generator
    SOLAR = "solar"
    SUB = "sub"


class MeterStatus(str, Enum):
    """Operational status of a meter."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    FAULTY = "faulty"


class AlertStatus(str, Enum):
    """Alert level attached to a reading."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
