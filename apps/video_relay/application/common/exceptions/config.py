"""테넌트 설정 저장소 예외."""

from apps.video_relay.application.common.exceptions.base import RelayError


class ConfigLoadError(RelayError):
    """설정 파일을 읽을 수 없음.

    치명적이지 않으며 빈 설정으로 대체됩니다.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load tenant config {path}: {reason}")


class ConfigPersistError(RelayError):
    """설정 파일 저장 실패."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to persist tenant config {path}: {reason}")
