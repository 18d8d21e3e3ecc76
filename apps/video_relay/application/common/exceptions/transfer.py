"""파일 전송/전달 예외.

작업 단위 예외로, 대상 채널에 에러 알림으로 보고됩니다.
"""

from apps.video_relay.application.common.exceptions.base import RelayError


class TransferError(RelayError):
    """파일 전송 파이프라인 실패."""


class DownloadError(TransferError):
    """다운로드 실패 (네트워크 오류, 비정상 응답, 타임아웃)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Download failed for {url}: {reason}")


class FileValidationError(TransferError):
    """다운로드된 파일 검증 실패."""


class EmptyFileError(FileValidationError):
    """파일 크기가 0."""

    def __init__(self) -> None:
        super().__init__("Downloaded file is empty")


class FileTooLargeError(FileValidationError):
    """파일 크기가 업로드 상한 초과."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"File size {size} bytes exceeds limit of {limit} bytes")


class DeliveryError(RelayError):
    """채팅 채널로의 업로드 실패."""

    def __init__(self, channel_id: str, reason: str) -> None:
        self.channel_id = channel_id
        super().__init__(f"Delivery to channel {channel_id} failed: {reason}")


class SubmissionError(RelayError):
    """백엔드 작업 제출 실패."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Job submission failed: {reason}")
