"""Video Relay 예외."""

from apps.video_relay.application.common.exceptions.base import RelayError
from apps.video_relay.application.common.exceptions.broker import (
    BrokerConnectError,
    DecodeError,
    JobResultValidationError,
    MessageError,
)
from apps.video_relay.application.common.exceptions.chat import ChatConnectError
from apps.video_relay.application.common.exceptions.config import (
    ConfigLoadError,
    ConfigPersistError,
)
from apps.video_relay.application.common.exceptions.transfer import (
    DeliveryError,
    DownloadError,
    EmptyFileError,
    FileTooLargeError,
    FileValidationError,
    SubmissionError,
    TransferError,
)

__all__ = [
    "RelayError",
    "BrokerConnectError",
    "ChatConnectError",
    "ConfigLoadError",
    "ConfigPersistError",
    "DecodeError",
    "DeliveryError",
    "DownloadError",
    "EmptyFileError",
    "FileTooLargeError",
    "FileValidationError",
    "JobResultValidationError",
    "MessageError",
    "SubmissionError",
    "TransferError",
]
