# assignmentpro/schemas/payment.py
from enum import Enum

class PaymentType(str, Enum):
    REGISTRATION_FEE = "REGISTRATION_FEE"
    COMMISSION = "COMMISSION"

class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
