"""릴레이 예외 베이스 클래스."""


class RelayError(Exception):
    """모든 릴레이 예외의 베이스 클래스.

    작업 제출/결과 전달 중 발생하는 예외를 나타냅니다.
    """

    def __init__(self, message: str = "Relay error occurred") -> None:
        self.message = message
        super().__init__(message)
