"""Infrastructure ORM Models"""

from .user_model import UserModel
from .one_time_code_model import OneTimeCodeModel
from .session_model import SessionModel
from .recording_model import RecordingModel
from .appointment_model import AppointmentModel

__all__ = [
    'UserModel',
    'OneTimeCodeModel',
    'SessionModel',
    'RecordingModel',
    'AppointmentModel',
]
