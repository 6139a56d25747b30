from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization checks."""

    AGENT = "agent"
    MANAGER = "manager"
    ADMIN = "admin"


class AuxType(str, Enum):
    """Auxiliary (non-productive) states an agent can switch into."""

    BREAK = "break"
    LUNCH = "lunch"
    LAST_BREAK = "last_break"
    MEETING = "meeting"
    COACHING = "coaching"
    TRAINING = "training"
    TECHNICAL_ISSUE = "technical_issue"
    FLOOR_SUPPORT = "floor_support"
    AVAILABLE = "available"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    CASUAL = "casual"
    OVERTIME = "overtime"
    CANCEL_DAY_OFF = "cancel_day_off"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class TargetResponse(str, Enum):
    """Answer of the agent asked to take over a shift."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class ManagerApproval(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SwapStatus(str, Enum):
    """Overall outcome of a shift swap."""

    PENDING = "pending"
    FINALIZED = "finalized"
    CANCELLED = "cancelled"


class AgentLiveStatus(str, Enum):
    OFF = "off"
    CLOCKED_OUT = "clocked_out"
    AUX = "aux"
    AVAILABLE = "available"
