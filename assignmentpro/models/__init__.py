from .department import Department
from .admin import Admin
from .user import User
from .assignment import Assignment, AssignmentStatus, OPEN_STATUSES, TERMINAL_STATUSES, status_label
from .payment import Payment, PaymentType, PaymentStatus
from .announcement import Announcement, AnnouncementTarget, UserAnnouncement
from .report import Report, ReportStatus, REPORT_WORKFLOW
