from booking_app.client.api import AdminApiClient, ApiError
from booking_app.client.audit_logs import AuditLogViewer
from booking_app.client.dashboard import AdminDashboard, DashboardSnapshot, whatsapp_link
from booking_app.client.poller import Poller

__all__ = [
    "AdminApiClient",
    "AdminDashboard",
    "ApiError",
    "AuditLogViewer",
    "DashboardSnapshot",
    "Poller",
    "whatsapp_link",
]
