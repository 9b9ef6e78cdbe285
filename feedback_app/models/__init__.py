from .form import Form
from .feedback import Feedback, UNKNOWN
from .notification_setting import NotificationSetting

__all__ = ["Form", "Feedback", "NotificationSetting", "UNKNOWN"]
