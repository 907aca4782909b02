from app.models.admin_model import Admin  # noqa: F401
from app.models.audit_log_model import AuditLog  # noqa: F401
from app.models.submission_model import Submission  # noqa: F401
