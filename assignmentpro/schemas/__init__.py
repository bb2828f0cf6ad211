from .auth import Principal, PrincipalKind, LoginRequest, Token, MakerRegistration, AdminRegistration
from .department import DepartmentCreate, DepartmentUpdate, DepartmentBasic, DepartmentOut
from .user import MakerPublic, MakerOut, AdminOut, UserBasic, MakerApprovalUpdate, RegistrationResult
from .assignment import AssignmentSubmission, ClaimRequest, AdminAssignmentUpdate, AssignmentOut, SubmissionResult, ClaimResult, CompletionResult
from .balance import PaymentOut, MakerBalance, AdminOverview
from .announcement import AnnouncementCreate, AnnouncementOut, UserAnnouncementOut
from .report import ReportCreate, ReportUpdate, ReportOut
